from __future__ import annotations

import pytest

from emojiscan.classifier import (
    VS15,
    VS16,
    ZWJ,
    EmojiProperty,
    UnicodeEmojiClassifier,
    is_joiner_or_selector,
    load_classifier,
    parse_emoji_data,
)
from emojiscan.errors import EmojiDataError


def test_bundled_properties_for_common_characters(classifier) -> None:
    assert classifier.properties("😀") == EmojiProperty.EMOJI | EmojiProperty.PRESENTATION
    assert classifier.is_emoji_modifier_base("👋")
    assert classifier.has_emoji_presentation("👋")

    tone = "\U0001F3FD"
    assert classifier.is_emoji_modifier(tone)
    assert classifier.is_emoji_component(tone)
    assert classifier.is_emoji(tone)


def test_ascii_digits_are_emoji_without_presentation(classifier) -> None:
    assert classifier.is_emoji("#")
    assert classifier.is_emoji_component("7")
    assert not classifier.has_emoji_presentation("7")
    assert classifier.properties("a") == EmojiProperty.NONE


def test_joiners_and_selectors(classifier) -> None:
    assert classifier.is_emoji_component(ZWJ)
    assert not classifier.is_emoji(ZWJ)
    assert classifier.is_emoji_component(VS16)
    # VS15 carries no emoji property at all
    assert classifier.properties(VS15) == EmojiProperty.NONE
    assert all(is_joiner_or_selector(ch) for ch in (ZWJ, VS15, VS16))
    assert not is_joiner_or_selector("\u200c")


def test_regional_indicators_are_components(classifier) -> None:
    ri = "\U0001F1E6"
    assert classifier.is_emoji(ri)
    assert classifier.is_emoji_component(ri)
    assert not classifier.is_emoji_modifier(ri)


def test_bundled_version_is_read_from_header(classifier) -> None:
    assert classifier.version == "16.0.0"
    assert len(classifier) > 1400


def test_parse_skips_unrelated_properties() -> None:
    txt = (
        "# Version: 99.0\n"
        "1F600..1F602 ; Emoji # faces\n"
        "1F600        ; Extended_Pictographic\n"
        "\n"
        "1F3FB..1F3FF ; Emoji_Modifier\n"
    )
    ranges = parse_emoji_data(txt)
    assert ranges == [
        (0x1F600, 0x1F602, EmojiProperty.EMOJI),
        (0x1F3FB, 0x1F3FF, EmojiProperty.MODIFIER),
    ]
    c = UnicodeEmojiClassifier.from_emoji_data(txt)
    assert c.version == "99.0"
    assert c.is_emoji("\U0001F601")
    assert not c.is_emoji("\U0001F603")


@pytest.mark.parametrize(
    "line",
    [
        "1F600 Emoji",
        "ZZZZ ; Emoji",
        "1F602..1F600 ; Emoji",
        "110000 ; Emoji",
    ],
)
def test_parse_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(EmojiDataError) as exc:
        parse_emoji_data("# header\n" + line + "\n", source="bad.txt")
    assert exc.value.lineno == 2
    assert exc.value.source == "bad.txt"
    assert "bad.txt:2" in str(exc.value)


def test_from_ranges_builds_synthetic_classifier() -> None:
    c = UnicodeEmojiClassifier.from_ranges(
        {
            EmojiProperty.EMOJI: [("Ω", "Ω")],
            EmojiProperty.COMPONENT: [("Ψ", "Ψ"), ("Ω", "Ω")],
        }
    )
    assert c.properties("Ω") == EmojiProperty.EMOJI | EmojiProperty.COMPONENT
    assert c.properties("Ψ") == EmojiProperty.COMPONENT
    assert c.properties("x") == EmojiProperty.NONE


def test_load_classifier_from_override_path(tmp_path) -> None:
    path = tmp_path / "props.txt"
    path.write_text("00E9 ; Emoji_Presentation\n", encoding="utf-8")
    c = load_classifier(str(path))
    assert c.has_emoji_presentation("é")
    assert not c.is_emoji("é")

# tests/test_render.py
from simple_talk.models import ResultPayload, SimplificationResult, WordEntry
from simple_talk.render import (
    build_view,
    render_dictionary_text,
    render_word_entry,
)
from tests.conftest import SAMPLE_TRANSLATION


def test_empty_payload_shows_every_placeholder():
    view = build_view(ResultPayload())

    assert view.input_sentence == "입력 문장이 없습니다."
    assert view.input_pronunciation == "입력 문장 발음 정보 없음"
    assert view.easy_sentence == "쉬운 한국어 문장이 없습니다."
    assert view.easy_pronunciation == "쉬운 문장 발음 정보 없음"
    assert view.easy_english == "쉬운 한국어 영어 번역 정보 없음."
    assert view.words == ()


def test_blank_english_gloss_uses_short_placeholder():
    view = build_view(ResultPayload(easy_english=""))
    assert view.easy_english == "영어 번역 정보 없음"


def test_present_fields_are_shown_verbatim():
    payload = ResultPayload.from_result(SimplificationResult.from_json(SAMPLE_TRANSLATION))
    view = build_view(payload)

    assert view.input_sentence == "나는 밥을 먹었다"
    assert view.easy_pronunciation == "naneun bap meogeosseo"
    assert view.easy_english == "I ate rice"


def test_word_entry_heading_and_definitions():
    card = render_word_entry(WordEntry("먹다", "verb", ("to eat", "to have a meal")))

    assert card.heading == "먹다 (verb)"
    assert card.lines == ("to eat", "to have a meal")


def test_word_entry_without_definitions():
    card = render_word_entry(WordEntry("밥", "noun", ()))
    assert card.lines == ("뜻풀이 없음",)


def test_empty_dictionary_text():
    assert render_dictionary_text([]) == "단어 정보가 없습니다."


def test_dictionary_text_lists_each_definition_on_its_own_line():
    text = render_dictionary_text([
        WordEntry("밥", "noun", ("cooked rice", "meal")),
        WordEntry("먹다", "verb", ()),
    ])

    assert text == "밥 (noun)\ncooked rice\nmeal\n\n먹다 (verb)\n뜻풀이 없음"

"""
Display text for the result card.

The placeholder strings are shown verbatim whenever the backend leaves a
field out, and the playback guards compare against them, so they must not
change.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import ResultPayload, WordEntry

NO_INPUT_SENTENCE = "입력 문장이 없습니다."
NO_INPUT_PRONUNCIATION = "입력 문장 발음 정보 없음"
NO_EASY_SENTENCE = "쉬운 한국어 문장이 없습니다."
NO_EASY_PRONUNCIATION = "쉬운 문장 발음 정보 없음"
NO_EASY_ENGLISH = "쉬운 한국어 영어 번역 정보 없음."
EMPTY_EASY_ENGLISH = "영어 번역 정보 없음"        # gloss present but blank
NO_WORD_DATA = "단어 정보가 없습니다."
NO_DEFINITION = "뜻풀이 없음"


def _or(value: Optional[str], placeholder: str) -> str:
    return placeholder if value is None else value


@dataclass(frozen=True)
class WordCardView:
    heading: str                 # "word (pos)"
    lines: Tuple[str, ...]       # one per definition


@dataclass(frozen=True)
class ResultView:
    input_sentence: str
    input_pronunciation: str
    easy_sentence: str
    easy_pronunciation: str
    easy_english: str
    words: Tuple[WordCardView, ...]


def render_word_entry(entry: WordEntry) -> WordCardView:
    lines = entry.definitions if entry.definitions else (NO_DEFINITION,)
    return WordCardView(heading=f"{entry.word} ({entry.part_of_speech})", lines=tuple(lines))


def render_dictionary(entries: Sequence[WordEntry]) -> List[WordCardView]:
    return [render_word_entry(entry) for entry in entries]


def render_dictionary_text(entries: Sequence[WordEntry]) -> str:
    """Plain-text rendering: heading then one definition per line."""
    if not entries:
        return NO_WORD_DATA
    blocks = []
    for card in render_dictionary(entries):
        blocks.append("\n".join((card.heading,) + card.lines))
    return "\n\n".join(blocks)


def build_view(payload: ResultPayload) -> ResultView:
    """Resolve every payload field to the text the result card shows."""
    easy_english = _or(payload.easy_english, NO_EASY_ENGLISH) or EMPTY_EASY_ENGLISH
    return ResultView(
        input_sentence=_or(payload.input_sentence, NO_INPUT_SENTENCE),
        input_pronunciation=_or(payload.input_pronunciation, NO_INPUT_PRONUNCIATION),
        easy_sentence=_or(payload.easy_sentence, NO_EASY_SENTENCE),
        easy_pronunciation=_or(payload.easy_pronunciation, NO_EASY_PRONUNCIATION),
        easy_english=easy_english,
        words=tuple(render_dictionary(payload.dictionary)),
    )

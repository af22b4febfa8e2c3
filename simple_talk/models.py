from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    """Read an optional string field; null or missing stays None."""
    value = data.get(key)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class WordEntry:
    """A single vocabulary item extracted from the simplified sentence."""
    word: str = ""
    part_of_speech: str = ""                 # "pos" on the wire (noun, verb, ...)
    definitions: Tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "WordEntry":
        raw = data.get("definitions")
        if isinstance(raw, (str, dict)):
            raw = [raw]
        elif not isinstance(raw, list):
            raw = []

        definitions = []
        for item in raw:
            if isinstance(item, dict):
                definition = item.get("definition")
                if definition is not None:
                    definitions.append(str(definition))
            elif item is not None:
                definitions.append(str(item))
        return cls(
            word=str(data.get("word") or ""),
            part_of_speech=str(data.get("pos") or ""),
            definitions=tuple(definitions),
        )


@dataclass(frozen=True)
class SimplificationResult:
    """Parsed 2xx body of /translate-to-easy-korean."""
    original_text: Optional[str] = None
    original_pronunciation: Optional[str] = None      # romanized reading of the input
    simplified_text: Optional[str] = None
    simplified_pronunciation: Optional[str] = None
    simplified_english_gloss: Optional[str] = None
    dictionary: Tuple[WordEntry, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> "SimplificationResult":
        if not isinstance(data, dict):
            return cls()
        entries = data.get("keyword_dictionary") or []
        return cls(
            original_text=_text(data, "original_text"),
            original_pronunciation=_text(data, "original_romanized_pronunciation"),
            simplified_text=_text(data, "translated_text"),
            simplified_pronunciation=_text(data, "translated_romanized_pronunciation"),
            simplified_english_gloss=_text(data, "translated_english_translation"),
            dictionary=tuple(WordEntry.from_json(e) for e in entries if isinstance(e, dict)),
        )


@dataclass(frozen=True)
class ResultPayload:
    """
    Everything the result card needs, handed over by value when the input
    card navigates forward. None means "not supplied" and is rendered as a
    placeholder.
    """
    input_sentence: Optional[str] = None
    input_pronunciation: Optional[str] = None
    input_english: str = ""                  # the backend never translates the original
    easy_sentence: Optional[str] = None
    easy_pronunciation: Optional[str] = None
    easy_english: Optional[str] = None
    dictionary: Tuple[WordEntry, ...] = field(default_factory=tuple)
    tts_url: str = ""

    @classmethod
    def from_result(cls, result: SimplificationResult, tts_url: str = "") -> "ResultPayload":
        return cls(
            input_sentence=result.original_text,
            input_pronunciation=result.original_pronunciation,
            input_english="",
            easy_sentence=result.simplified_text,
            easy_pronunciation=result.simplified_pronunciation,
            easy_english=result.simplified_english_gloss,
            dictionary=result.dictionary,
            tts_url=tts_url or "",
        )

"""Core data types for scriptlab: the script tree."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

NEUTRAL_TONE = "0"


class Break(IntEnum):
    """Strength of the prosodic boundary after a unit."""
    PHONE = 0
    SYLLABLE = 1
    WORD = 2
    INTER_PHRASE = 3
    INTONATION_PHRASE = 4
    SENTENCE = 5


class Stress(IntEnum):
    NONE = 0
    PRIMARY = 1
    SECONDARY = 2
    TERTIARY = 3


class WordType(Enum):
    NORMAL = "normal"
    PUNCTUATION = "punctuation"
    SILENCE = "silence"
    OTHER = "other"


def stress_from_string(name: str) -> Stress:
    """Parse a stress mark ("0"-"3") into a Stress value."""
    if not name:
        raise ValueError("stress name must not be empty")
    try:
        return Stress(int(name))
    except ValueError:
        raise ValueError(f"Unrecognized stress name: {name!r}") from None


def stress_to_string(stress: Stress) -> str:
    """Render stress as its digit, or '' for no stress."""
    return "" if stress == Stress.NONE else str(int(stress))


def _owner(node, attr: str):
    value = getattr(node, attr)
    if value is None:
        raise ValueError(f"{type(node).__name__} has no owning {attr}")
    return value


@dataclass
class State:
    """Sub-phone acoustic state."""
    acoustics: Any = None
    phone: "Phone | None" = field(default=None, repr=False, compare=False)

    @property
    def has_acoustics(self) -> bool:
        return self.acoustics is not None

    def clear_acoustics(self) -> None:
        self.acoustics = None

    @property
    def owner(self) -> "Phone":
        return _owner(self, "phone")


@dataclass
class Phone:
    """A single phone of a script syllable."""
    name: str
    tone: str = NEUTRAL_TONE
    stress: Stress = Stress.NONE
    valid: bool = True
    sentence_id: str = ""
    unit_index: int = -1    # -1 when not bound to a training unit
    states: list[State] = field(default_factory=list)
    acoustics: Any = None
    syllable: "Syllable | None" = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("phone name must not be empty")
        if self.unit_index < -1:
            raise ValueError("unit index must be -1 or a non-negative index")

    @property
    def full_name(self) -> str:
        """Phone name qualified with its tone, e.g. 'a+t3'."""
        if not self.tone or self.tone == NEUTRAL_TONE:
            return self.name
        return f"{self.name}+{self.tone}"

    @property
    def has_acoustics(self) -> bool:
        return self.acoustics is not None

    def clear_acoustics(self) -> None:
        self.acoustics = None

    def add_state(self, state: State) -> State:
        state.phone = self
        self.states.append(state)
        return state

    @property
    def owner(self) -> "Syllable":
        return _owner(self, "syllable")


@dataclass
class Syllable:
    """A group of phones forming one syllable of a word."""
    phones: list[Phone] = field(default_factory=list)
    stress: Stress = Stress.NONE
    text: str = ""      # source pronunciation text, stress marks included
    word: "Word | None" = field(default=None, repr=False, compare=False)

    def add_phone(self, phone: Phone) -> Phone:
        phone.syllable = self
        self.phones.append(phone)
        return phone

    def pronunciation(self, strip_stress: bool = True) -> str:
        """Normalized pronunciation text of this syllable."""
        from scriptlab.pronunciation import remove_stress

        text = self.text or " ".join(p.name for p in self.phones)
        if strip_stress:
            return remove_stress(text).strip()
        return " ".join(text.split())

    @property
    def boundary(self) -> Break:
        """Break after this syllable: the word break on its last syllable."""
        word = self.owner
        syllables = word.unit_syllables()
        if syllables and syllables[-1] is self:
            return word.break_strength
        return Break.SYLLABLE

    @property
    def owner(self) -> "Word":
        return _owner(self, "word")


@dataclass(eq=False)
class Word:
    """A word of a script sentence."""
    grapheme: str
    word_type: WordType = WordType.NORMAL
    break_strength: Break = Break.WORD
    pronunciation: str = ""
    pos: str = ""
    emphasis: bool = False
    sentence: "Sentence | None" = field(default=None, repr=False, compare=False)
    _syllables: list[Syllable] | None = field(default=None, init=False, repr=False, compare=False)
    _syllables_source: str = field(default="", init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.grapheme is None:
            raise ValueError("word grapheme must not be None")

    @property
    def is_pronounceable_normal(self) -> bool:
        return self.word_type == WordType.NORMAL and bool(self.pronunciation)

    def unit_syllables(self) -> list[Syllable]:
        """Syllables parsed from the pronunciation, cached until it changes."""
        from scriptlab.pronunciation import build_syllables

        if self._syllables is None or self._syllables_source != self.pronunciation:
            self._syllables = build_syllables(self.pronunciation)
            self._syllables_source = self.pronunciation
            for syl in self._syllables:
                syl.word = self
        return self._syllables

    def units(self) -> list:
        from scriptlab.pronunciation import build_units

        return build_units(self.pronunciation)

    @property
    def owner(self) -> "Sentence":
        return _owner(self, "sentence")

    def __str__(self) -> str:
        return self.grapheme


@dataclass(eq=False)
class Sentence:
    """An ordered list of words within a script item."""
    id: str = ""
    words: list[Word] = field(default_factory=list)
    item: "Item | None" = field(default=None, repr=False, compare=False)

    def add_word(self, word: Word) -> Word:
        word.sentence = self
        self.words.append(word)
        return word

    @property
    def pronounceable_normal_words(self) -> list[Word]:
        return [w for w in self.words if w.is_pronounceable_normal]

    def build_intonation_phrases(self):
        """Group this sentence's words into intonation phrases."""
        from scriptlab.prosody import build_intonation_phrases

        return build_intonation_phrases(self.words)

    @property
    def owner(self) -> "Item":
        return _owner(self, "item")


@dataclass(eq=False)
class Item:
    """One script item: an utterance made of sentences."""
    id: str
    text: str = ""
    sentences: list[Sentence] = field(default_factory=list)

    def __post_init__(self):
        if not self.id:
            raise ValueError("item id must not be empty")

    def add_sentence(self, sentence: Sentence) -> Sentence:
        sentence.item = self
        if not sentence.id:
            sentence.id = f"{self.id}-{len(self.sentences) + 1}"
        self.sentences.append(sentence)
        return sentence

    @property
    def words(self) -> list[Word]:
        return [w for s in self.sentences for w in s.words]

    @property
    def pronounceable_normal_words(self) -> list[Word]:
        """Pronounceable normal words in document order."""
        return [w for s in self.sentences for w in s.pronounceable_normal_words]

    def pronunciation(self) -> str:
        """Word pronunciations joined by the word boundary."""
        from scriptlab.pronunciation import WORD_BOUNDARY

        prons = [w.pronunciation for w in self.words if w.pronunciation]
        return WORD_BOUNDARY.join(prons)

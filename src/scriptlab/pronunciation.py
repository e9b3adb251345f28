"""Pronunciation strings: stress stripping, syllable and unit splitting.

A pronunciation is a space-separated token stream such as
``r aa 1 - s t . ax n``. Boundary tokens split it into words (``/``),
word parts (``&``), syllables (``-``) and units (``.``). Stress is a
standalone digit after the vowel; tone is a standalone ``t<N>`` token
after the phone it belongs to.
"""

import re
from dataclasses import dataclass, field

from scriptlab.types import NEUTRAL_TONE, Phone, Syllable, stress_from_string

UNIT_BOUNDARY = " . "
SYLLABLE_BOUNDARY = " - "
WORD_PRON_BOUNDARY = " & "
WORD_BOUNDARY = " / "

_UNIT_TOKEN = "."
_SYLLABLE_TOKENS = {"-", "&"}
_SLICE_TOKENS = {".", "-", "&", "/"}

_STRESS_RE = re.compile(r"^[0-3?]$")
_TONE_RE = re.compile(r"^t[1-9][0-9]*$")


def is_stress_token(token: str) -> bool:
    return bool(_STRESS_RE.match(token))


def is_tone_token(token: str) -> bool:
    return bool(_TONE_RE.match(token))


def remove_stress(pronunciation: str) -> str:
    """Drop stress marks, normalizing whitespace to single spaces."""
    if pronunciation is None:
        raise ValueError("pronunciation must not be None")
    return " ".join(t for t in pronunciation.split() if not is_stress_token(t))


def untag_unit_boundary(pronunciation: str) -> str:
    """Replace unit boundaries with plain spaces ('sh . y . o' -> 'sh y o')."""
    return " ".join(t for t in pronunciation.split() if t != _UNIT_TOKEN)


def _split_on(pronunciation: str, boundaries: set[str]) -> list[str]:
    """Split a pronunciation at boundary tokens, dropping empty pieces."""
    pieces = []
    current: list[str] = []
    for token in pronunciation.split():
        if token in boundaries:
            if current:
                pieces.append(" ".join(current))
            current = []
        else:
            current.append(token)
    if current:
        pieces.append(" ".join(current))
    return pieces


def split_syllables(pronunciation: str) -> list[str]:
    """Split a word pronunciation into syllable strings (unit marks kept)."""
    if pronunciation is None:
        raise ValueError("pronunciation must not be None")
    return _split_on(pronunciation, _SYLLABLE_TOKENS)


def split_slices(pronunciation: str) -> list[str]:
    """Split a pronunciation into unit slices at every boundary kind.

    Empty slices are dropped, so a trailing boundary such as the one after
    ``ao 1 .`` in ``k . ao 1 . - s k`` yields no extra unit.
    """
    if pronunciation is None:
        raise ValueError("pronunciation must not be None")
    return _split_on(pronunciation, _SLICE_TOKENS)


@dataclass
class UnitPhone:
    """A phone as seen inside an alignment unit. The name may be empty."""
    name: str
    tone: str = NEUTRAL_TONE

    @property
    def full_name(self) -> str:
        if not self.tone or self.tone == NEUTRAL_TONE:
            return self.name
        return f"{self.name}+{self.tone}"


@dataclass
class Unit:
    """An ordered group of phones aligned as one recognizer token."""
    name: str
    phones: list[UnitPhone] = field(default_factory=list)

    @property
    def phone_count(self) -> int:
        return len(self.phones)

    @property
    def left_phone(self) -> str:
        return self.phones[0].name if self.phones else ""

    def label(self, ignore_tone: bool = True) -> str:
        """Join non-empty phone names with '+'; '' if every name is empty."""
        names = [
            p.name if ignore_tone else p.full_name
            for p in self.phones
            if p.name
        ]
        return "+".join(names)


def build_unit(slice_text: str) -> Unit:
    """Parse one slice ('s t', 'a t3', 'x+y') into a Unit."""
    if not slice_text or not slice_text.strip():
        raise ValueError("slice must not be empty")

    elements = [e for e in re.split(r"[ +]", slice_text) if e]
    phones: list[UnitPhone] = []
    i = 0
    while i < len(elements):
        if is_tone_token(elements[i]):
            raise ValueError(f"Tone {elements[i]} has no phone to attach to in [{slice_text}]")
        phone = UnitPhone(name=elements[i])
        if i + 1 < len(elements) and is_tone_token(elements[i + 1]):
            phone.tone = elements[i + 1]
            i += 1
        phones.append(phone)
        i += 1

    if not phones:
        raise ValueError(f"Invalid unit format, can't extract phone from unit [{slice_text}]")
    return Unit(name=slice_text.strip(), phones=phones)


def build_units(pronunciation: str) -> list[Unit]:
    """Stress-free units of a word or item pronunciation, in order."""
    if not pronunciation:
        return []
    return [build_unit(s) for s in split_slices(remove_stress(pronunciation))]


def build_syllables(pronunciation: str) -> list[Syllable]:
    """Parse a word pronunciation into Syllable objects with Phones.

    Stress tokens set the syllable stress; tone tokens attach to the
    preceding phone.
    """
    syllables = []
    for text in split_syllables(pronunciation or ""):
        syllable = Syllable(text=text)
        for token in text.split():
            if token == _UNIT_TOKEN:
                continue
            if is_stress_token(token):
                if token != "?":
                    syllable.stress = stress_from_string(token)
            elif is_tone_token(token):
                if not syllable.phones:
                    raise ValueError(f"Tone {token} has no phone to attach to in [{text}]")
                syllable.phones[-1].tone = token
            else:
                syllable.add_phone(Phone(name=token))
        if syllable.phones:
            syllables.append(syllable)
    return syllables

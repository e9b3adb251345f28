"""Prosodic grouping: intonation phrases, intermediate phrases, prosodic words.

Phrases live in a PhraseArena and refer to their owners by integer
handle, so a ProsodicWord knows its intermediate phrase and an
IntermediatePhrase knows its intonation phrase without owning them.
"""

import logging
from dataclasses import dataclass, field

from scriptlab.types import Break, Word

logger = logging.getLogger(__name__)


@dataclass
class ProsodicWord:
    """One pronounceable word plus the non-normal words it absorbed."""
    phrase: int                 # handle of the owning intermediate phrase
    words: list[Word] = field(default_factory=list)

    def __str__(self) -> str:
        return " ".join(w.grapheme for w in self.words)


@dataclass
class IntermediatePhrase:
    intonation_phrase: int | None = None    # handle into the arena
    prosodic_words: list[ProsodicWord] = field(default_factory=list)

    @property
    def all_words(self) -> list[Word]:
        return [w for pw in self.prosodic_words for w in pw.words]

    def find_prosodic_word(self, word: Word) -> ProsodicWord | None:
        """Return the prosodic word containing `word`, or None."""
        if word is None:
            raise ValueError("word must not be None")
        for pw in self.prosodic_words:
            if any(w is word for w in pw.words):
                return pw
        return None

    def __str__(self) -> str:
        return " ".join(str(pw) for pw in self.prosodic_words)


@dataclass
class IntonationPhrase:
    intermediate_phrases: list[int] = field(default_factory=list)


@dataclass
class PhraseArena:
    """Owns every phrase of one sentence; phrases are addressed by index."""
    intonation_phrases: list[IntonationPhrase] = field(default_factory=list)
    intermediate_phrases: list[IntermediatePhrase] = field(default_factory=list)

    def intonation(self, handle: int) -> IntonationPhrase:
        return self.intonation_phrases[handle]

    def intermediate(self, handle: int) -> IntermediatePhrase:
        return self.intermediate_phrases[handle]

    def add_intonation_phrase(self, words: list[Word]) -> int:
        """Split words into intermediate phrases under a new intonation phrase."""
        handle = len(self.intonation_phrases)
        phrase = IntonationPhrase()
        self.intonation_phrases.append(phrase)
        for group in split_at_break(words, Break.INTER_PHRASE):
            phrase.intermediate_phrases.append(
                self.add_intermediate_phrase(group, intonation_phrase=handle)
            )
        return handle

    def add_intermediate_phrase(
        self,
        words: list[Word],
        intonation_phrase: int | None = None,
    ) -> int:
        """Register an intermediate phrase and group its prosodic words."""
        handle = len(self.intermediate_phrases)
        phrase = IntermediatePhrase(intonation_phrase=intonation_phrase)
        self.intermediate_phrases.append(phrase)
        phrase.prosodic_words = group_prosodic_words(words, handle)
        return handle

    def intermediate_phrases_of(self, handle: int) -> list[IntermediatePhrase]:
        return [self.intermediate(h) for h in self.intonation(handle).intermediate_phrases]

    @property
    def prosodic_words(self) -> list[ProsodicWord]:
        return [pw for ip in self.intermediate_phrases for pw in ip.prosodic_words]

    def find_intermediate_phrase(self, word: Word) -> int | None:
        """Handle of the intermediate phrase containing `word`, or None."""
        for handle, phrase in enumerate(self.intermediate_phrases):
            if phrase.find_prosodic_word(word) is not None:
                return handle
        return None

    def find_intonation_phrase(self, word: Word) -> int | None:
        handle = self.find_intermediate_phrase(word)
        if handle is None:
            return None
        return self.intermediate(handle).intonation_phrase


def split_at_break(words: list[Word], threshold: Break) -> list[list[Word]]:
    """Partition words at pronounceable words whose break reaches `threshold`.

    A group closes at a pronounceable normal word when its break is at
    least `threshold` or when it is the last word. The non-normal words
    that follow it, up to the next pronounceable word, join the same
    group. Whatever is left at the end forms a final group, e.g. a
    syllable-break word followed only by punctuation.
    """
    if words is None:
        raise ValueError("words must not be None")

    groups: list[list[Word]] = []
    pending: list[Word] = []
    i = 0
    n = len(words)
    while i < n:
        word = words[i]
        pending.append(word)
        if word.is_pronounceable_normal and (
            word.break_strength >= threshold or i == n - 1
        ):
            j = i + 1
            while j < n and not words[j].is_pronounceable_normal:
                pending.append(words[j])
                j += 1
            i = j - 1
            groups.append(pending)
            pending = []
        i += 1

    if pending:
        logger.debug(f"Flushing {len(pending)} trailing word(s) into a final group")
        groups.append(pending)
    return groups


def group_prosodic_words(words: list[Word], phrase: int = 0) -> list[ProsodicWord]:
    """Partition an intermediate phrase's words into prosodic words.

    Each returned ProsodicWord points back to `phrase`, the caller's
    intermediate phrase handle.
    """
    return [
        ProsodicWord(phrase=phrase, words=group)
        for group in split_at_break(words, Break.WORD)
    ]


def build_intonation_phrases(words: list[Word]) -> PhraseArena:
    """Build the full phrase hierarchy for a sentence's words."""
    arena = PhraseArena()
    for group in split_at_break(words, Break.INTONATION_PHRASE):
        arena.add_intonation_phrase(group)
    return arena

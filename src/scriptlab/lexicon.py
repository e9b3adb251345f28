"""Fill missing word pronunciations from g2p_en ARPABET output."""

import logging
import re

from g2p_en import G2p

from scriptlab.pronunciation import SYLLABLE_BOUNDARY
from scriptlab.types import Item, Word, WordType

logger = logging.getLogger(__name__)

_g2p = None

_ARPABET_RE = re.compile(r"^([A-Z]+)([0-2]?)$")

# ARPABET symbols whose TTS spelling is not just the lower-cased symbol
_TTS_SPELLING = {"HH": "h"}

# Sonority scale for ARPABET consonants (higher = more sonorous)
_SONORITY = {}
for p in ("P", "B", "T", "D", "K", "G"):
    _SONORITY[p] = 1
for p in ("CH", "JH"):
    _SONORITY[p] = 2
for p in ("F", "V", "TH", "DH", "S", "Z", "SH", "ZH", "HH"):
    _SONORITY[p] = 3
for p in ("M", "N", "NG"):
    _SONORITY[p] = 4
for p in ("L", "R"):
    _SONORITY[p] = 5
for p in ("W", "Y"):
    _SONORITY[p] = 6

# These sounds cannot start an English syllable
_ILLEGAL_ONSETS = {"NG", "ZH"}

_S_CLUSTER_STOPS = {"P", "T", "K"}


def _get_g2p() -> G2p:
    """Lazy-init g2p_en (downloads model on first use)."""
    global _g2p
    if _g2p is None:
        _g2p = G2p()
    return _g2p


def _valid_onset(onset: list[str]) -> bool:
    """True when sonority strictly rises toward the nucleus.

    An s + voiceless stop start ("s t r", "s k") is allowed as well.
    """
    if any(p in _ILLEGAL_ONSETS for p in onset):
        return False
    if len(onset) >= 2 and onset[0] == "S" and onset[1] in _S_CLUSTER_STOPS:
        onset = onset[1:]
    sonorities = [_SONORITY.get(p, 0) for p in onset]
    return all(a < b for a, b in zip(sonorities, sonorities[1:]))


def _onset_start(symbols: list[str], prev_vowel: int, vowel: int) -> int:
    """Index where the syllable of `vowel` starts, maximizing its onset."""
    for split in range(prev_vowel + 1, vowel):
        if _valid_onset(symbols[split:vowel]):
            return split
    return vowel


def arpabet_to_pronunciation(phonemes: list[str]) -> str:
    """Convert ARPABET phonemes to a syllabified pronunciation string.

    ``["HH", "AH0", "L", "OW1"]`` becomes ``"h ah 0 - l ow 1"``. Each
    vowel after the first starts a new syllable, taking the longest
    legal onset from the consonants before it. Tokens that are not
    ARPABET (spaces, punctuation) are dropped.
    """
    parsed = []
    for p in phonemes:
        m = _ARPABET_RE.match(p.strip())
        if m:
            parsed.append((m.group(1), m.group(2)))
    if not parsed:
        return ""

    symbols = [symbol for symbol, _ in parsed]
    vowel_positions = [i for i, (_, stress) in enumerate(parsed) if stress]
    starts = {
        _onset_start(symbols, prev, vowel)
        for prev, vowel in zip(vowel_positions, vowel_positions[1:])
    }

    syllables: list[list[str]] = [[]]
    for i, (symbol, stress) in enumerate(parsed):
        if i in starts:
            syllables.append([])
        syllables[-1].append(_TTS_SPELLING.get(symbol, symbol.lower()))
        if stress:
            syllables[-1].append(stress)

    return SYLLABLE_BOUNDARY.join(" ".join(s) for s in syllables if s)


def fill_missing_pronunciations(items: list[Item]) -> list[Word]:
    """Give every normal word without a pronunciation one from g2p_en.

    Returns the words that were filled.
    """
    targets = [
        w for item in items for w in item.words
        if w.word_type == WordType.NORMAL
        and not w.pronunciation.strip()
        and w.grapheme.strip()
    ]
    if not targets:
        return []

    g2p = _get_g2p()
    filled = []
    for word in targets:
        pron = arpabet_to_pronunciation(g2p(word.grapheme))
        if not pron:
            logger.warning(f"g2p produced no phonemes for {word.grapheme!r}")
            continue
        word.pronunciation = pron
        filled.append(word)

    logger.info(f"Filled {len(filled)} of {len(targets)} missing pronunciations")
    return filled

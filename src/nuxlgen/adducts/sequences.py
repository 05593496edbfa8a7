"""Restriction sequence handling.

A restriction sequence contains the nucleotide context(s) where cross-links are allowed. Source
nucleotides in the sequence may be substituted by one or more target nucleotides using mapping
rules such as ``"A->X"``. The expanded target sequences are used to check if a nucleotide
composition is compatible with the restriction sequence.

"""

from __future__ import annotations

from logging import getLogger
from typing import Iterable, Sequence

from ..core.exceptions import MalformedMappingSpec
from ..utils.numpy import cartesian_product_from_iterable

logger = getLogger(__name__)

SubstitutionRules = dict[str, list[str]]
"""Map source nucleotides to their target nucleotides."""


def parse_mappings(mappings: Iterable[str]) -> SubstitutionRules:
    """Create substitution rules from mapping strings.

    :param mappings: mapping strings in the ``"source->target"`` format. Only the first character of
        the source and target is used.
    :return: a dictionary that maps each source nucleotide to its distinct targets, in order of appearance.
    :raises MalformedMappingSpec: if a mapping string is not in the expected format

    """
    rules: SubstitutionRules = dict()
    for m in mappings:
        source, sep, target = m.partition("->")
        if not sep or not source or not target:
            raise MalformedMappingSpec(f"Mappings must be in the format `A->X`. Got `{m}`.")
        targets = rules.setdefault(source[0], list())
        if target[0] not in targets:
            targets.append(target[0])
    return rules


def create_restriction_sequence(symbols: Sequence[str], max_length: int) -> str:
    """Create a restriction sequence that allows any combination of nucleotides.

    The sequence is the concatenation of all strings with length from ``1`` to `max_length` built
    from `symbols`, sorted by length.

    :param symbols: the nucleotides used to build the sequence.
    :param max_length: the maximum length of nucleotide combinations

    """
    if not symbols:
        return ""
    combinations = list()
    for length in range(1, max_length + 1):
        product = cartesian_product_from_iterable(*([symbols] * length))
        combinations.extend("".join(row) for row in product)
    return "".join(combinations)


def simplify_rules(rules: SubstitutionRules, sequence: str) -> tuple[SubstitutionRules, str]:
    """Remove trivial substitution rules.

    Identity rules (e.g. only ``A->A``) are removed. Rename rules (e.g. only ``A->X``) are applied
    to the sequence and removed. Rules are processed in source nucleotide order. Combinatorial
    rules, with two or more targets, are kept.

    :param rules: the substitution rules
    :param sequence: the restriction sequence
    :return: the combinatorial rules and the sequence with renames applied

    """
    combinatorial: SubstitutionRules = dict()
    for source in sorted(rules):
        targets = rules[source]
        if len(targets) > 1:
            combinatorial[source] = targets
        elif targets[0] != source:
            sequence = sequence.replace(source, targets[0])
    return combinatorial, sequence


def expand_sequence(sequence: str, rules: SubstitutionRules, start: int = 0) -> list[str]:
    """Generate all target sequences obtained by substituting source nucleotides.

    Each source nucleotide in the sequence, starting at `start`, is independently replaced by each
    one of its targets. A generated sequence is kept only if all of its nucleotides are either
    not a source nucleotide or a source nucleotide that is also one of its own targets.

    :param sequence: the restriction sequence
    :param rules: the substitution rules
    :param start: the position in the sequence where substitutions start
    :return: the target sequences in generation order

    """
    res = list()
    stack = [(sequence, start)]
    while stack:
        current, pos = stack.pop()
        for k in range(pos, len(current)):
            for target in rules.get(current[k], list()):
                if target != current[k]:
                    stack.append((current[:k] + target + current[k + 1 :], k + 1))
        if _is_valid_target_sequence(current, rules):
            res.append(current)
    return res


def _is_valid_target_sequence(sequence: str, rules: SubstitutionRules) -> bool:
    return all(x not in rules or x in rules[x] for x in sequence)


def not_in_sequence(sequence: str, query: str) -> bool:
    """Check if a nucleotide composition is absent from a sequence.

    All substrings of the sequence with the same length as the query are compared with the query
    after sorting their nucleotides, i.e. ``"AU"`` is found in ``"GUAC"``.

    :param sequence: the target sequence
    :param query: the nucleotide composition to search. An empty query is found in every sequence.
    :return: ``True`` if the composition is not found in the sequence.

    """
    if not query:
        return False
    sorted_query = sorted(query)
    size = len(query)
    for k in range(len(sequence) - size + 1):
        if sorted(sequence[k : k + size]) == sorted_query:
            return False
    return True


def log_target_sequences(sequences: list[str], verbose: bool) -> None:
    """Log the generated target sequences.

    :param sequences: the target sequences
    :param verbose: if ``True``, log each sequence, truncated to 60 nucleotides.

    """
    logger.info(f"sequence(s): {len(sequences)}")
    if not verbose:
        return
    for seq in sequences:
        logger.info(seq if len(seq) < 60 else f"{seq[:60]}...")

from .blocks import BlockNormalizer, ConditionalElevation
from .idioms import IdiomRewriter
from .literals import LiteralCanonicalizer, LiteralFolder
from .members import MemberAccessNormalizer
from .sequences import SequenceFlattener


def stage_a():
    return [
        LiteralFolder(),
        LiteralCanonicalizer(),
        MemberAccessNormalizer(),
        BlockNormalizer(),
        ConditionalElevation(),
    ]


def stage_b():
    return [SequenceFlattener(), IdiomRewriter()]

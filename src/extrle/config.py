"""
Parse configuration.

A `ParseConfig` is immutable and passed explicitly to `parse()`; there is no
global configuration, so concurrent parses never interfere.
"""

from dataclasses import dataclass, fields

from .state import MAX_STATE


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """
    Attributes:
        max_state: Highest cell state accepted in the body. Use 1 for
            two-state (boolean) patterns.
        strict_cxrle: Interpret #CXRLE lines while parsing, rejecting
            unknown keys, malformed Pos/Gen values and repeated lines.
        keep_comments: Record the text of plain comment lines in
            `Document.comments`.
    """

    max_state: int = MAX_STATE
    strict_cxrle: bool = False
    keep_comments: bool = True

    def __post_init__(self):
        if not 0 <= self.max_state <= MAX_STATE:
            raise ValueError(f'max_state must be in 0..{MAX_STATE}, got {self.max_state}')

    @classmethod
    def from_dict(cls, config_dict):
        """
        Build a config from a mapping, ignoring keys that are not fields.
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in names})


DEFAULT_CONFIG = ParseConfig()

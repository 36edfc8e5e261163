"""
Parser Settings

Defines the tunable constants of the OFX reading pipeline.
"""
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


def _frozen_mapping(data: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({k.upper(): v for k, v in data.items()})


@dataclass(frozen=True)
class ParserSettings:
    """
    Configuration for the OFX pipeline.

    Attributes:
        root_marker: Tag separating the header from the body (matched case-insensitively)
        empty_leaf_tags: Leaf tags that may appear alone on a line with no content
            and must be closed explicitly (e.g. a bare <MEMO>)
        encoding_aliases: ENCODING header values mapped to a codec name
        charset_aliases: CHARSET header values mapped to a codec name
        date_formats: strptime layouts tried, in order, for OFX dates
    """
    root_marker: str = '<OFX>'
    empty_leaf_tags: FrozenSet[str] = frozenset({'MEMO'})
    encoding_aliases: Mapping[str, str] = field(default_factory=lambda: _frozen_mapping({
        'UTF-8': 'UTF-8',
        'UTF8': 'UTF-8',
    }))
    charset_aliases: Mapping[str, str] = field(default_factory=lambda: _frozen_mapping({
        'UTF-8': 'UTF-8',
        'UTF8': 'UTF-8',
        '1252': 'Windows-1252',
        'ISO-8859-1': 'ISO-8859-1',
        'ISO8859-1': 'ISO-8859-1',
    }))
    date_formats: Tuple[str, ...] = ('%Y%m%d%H%M%S', '%Y%m%d%H%M', '%Y%m%d')

    @classmethod
    def from_dict(cls, data: dict) -> 'ParserSettings':
        """
        Build settings from a (possibly partial) dict, e.g. loaded from JSON.

        Missing keys keep their defaults; unknown keys raise ValueError.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown parser settings: {', '.join(sorted(unknown))}")

        values = dict(data)
        if 'empty_leaf_tags' in values:
            values['empty_leaf_tags'] = frozenset(values['empty_leaf_tags'])
        if 'date_formats' in values:
            values['date_formats'] = tuple(values['date_formats'])
        for key in ('encoding_aliases', 'charset_aliases'):
            if key in values:
                values[key] = _frozen_mapping(values[key])

        return cls(**values)


DEFAULT_SETTINGS = ParserSettings()

"""Binding libraries: map CQL column types to data generator recipes."""

import re
from typing import Callable, Dict, List, Optional, Tuple, Union
from cqlgen.config.logging import get_logger

logger = get_logger(__name__)

# A rule maps a type pattern to a recipe, or to a function of the regex match
# that builds one (returning None when it cannot)
Recipe = Union[str, Callable[["re.Match[str]"], Optional[str]]]

# Single-function element generators usable inside collection recipes
ELEMENT_FUNCTIONS: Dict[str, str] = {
    "ascii": "NumberNameToString()",
    "text": "NumberNameToString()",
    "varchar": "NumberNameToString()",
    "bigint": "ToLong()",
    "int": "ToInt()",
    "smallint": "ToShort()",
    "tinyint": "ToByte()",
    "varint": "ToBigInteger()",
    "decimal": "ToBigDecimal()",
    "double": "ToDouble()",
    "float": "ToFloat()",
    "boolean": "ToBoolean()",
    "uuid": "ToHashedUUID()",
    "timeuuid": "ToTimeUUID()",
    "timestamp": "ToJavaInstant()",
    "date": "LongToLocalDateDays()",
    "inet": "ToInetAddress()",
}

COLLECTION_SIZE = "HashRange(1,5)"


class BindingsLibrary:
    """Ordered set of type rules; the first rule whose pattern matches wins."""

    def __init__(self, name: str, rules: Optional[List[Tuple[str, Recipe]]] = None):
        self.name = name
        self._rules: List[Tuple["re.Pattern[str]", Recipe]] = []
        for pattern, recipe in rules or []:
            self.add_rule(pattern, recipe)

    def add_rule(self, pattern: str, recipe: Recipe) -> None:
        """
        Append a rule.

        Args:
            pattern: Regular expression matched against the whole type text
                (case-insensitive, whitespace-normalized)
            recipe: Generator recipe, or a function building one from the match
        """
        self._rules.append((re.compile(pattern, re.IGNORECASE), recipe))

    def resolve(self, type_def: str) -> Optional[str]:
        """Return the recipe for a type, or None if no rule applies."""
        normalized = "".join(type_def.split())
        for pattern, recipe in self._rules:
            match = pattern.fullmatch(normalized)
            if match is None:
                continue
            resolved = recipe(match) if callable(recipe) else recipe
            if resolved is not None:
                return resolved
        return None

    def __len__(self) -> int:
        return len(self._rules)


def _element(type_def: str) -> Optional[str]:
    type_def = type_def.lower()
    frozen = re.fullmatch(r"frozen<(.+)>", type_def)
    if frozen:
        type_def = frozen.group(1)
    return ELEMENT_FUNCTIONS.get(type_def)


def _list_recipe(match: "re.Match[str]") -> Optional[str]:
    element = _element(match.group(1))
    return None if element is None else f"ListSizedHashed({COLLECTION_SIZE},{element})"


def _set_recipe(match: "re.Match[str]") -> Optional[str]:
    element = _element(match.group(1))
    return None if element is None else f"SetSizedHashed({COLLECTION_SIZE},{element})"


def _map_recipe(match: "re.Match[str]") -> Optional[str]:
    key, value = _element(match.group(1)), _element(match.group(2))
    if key is None or value is None:
        return None
    return f"MapSizedHashed({COLLECTION_SIZE},{key},{value})"


def _frozen_recipe(match: "re.Match[str]") -> Optional[str]:
    return CQL_DEFAULT_BINDINGS.resolve(match.group(1))


CQL_DEFAULT_BINDINGS = BindingsLibrary(
    "cql-defaults",
    [
        (r"ascii", "Hash(); AlphaNumericString(100)"),
        (r"text|varchar", "Hash(); NumberNameToString()"),
        (r"bigint", "Hash(); ToLong()"),
        (r"int", "Hash(); ToInt()"),
        (r"smallint", "Hash(); ToShort()"),
        (r"tinyint", "Hash(); ToByte()"),
        (r"varint", "Hash(); ToBigInteger()"),
        (r"decimal", "Hash(); ToBigDecimal()"),
        (r"double", "Hash(); ToDouble()"),
        (r"float", "Hash(); ToFloat()"),
        (r"boolean", "Hash(); ToBoolean()"),
        (r"counter", "HashRange(1,10); ToLong()"),
        (r"uuid", "ToHashedUUID()"),
        (r"timeuuid", "ToTimeUUID()"),
        (r"timestamp", "Hash(); ToJavaInstant()"),
        (r"date", "Hash(); LongToLocalDateDays()"),
        (r"time", "Hash(); Mod(86400000000000L); ToCqlTime()"),
        (r"duration", "Hash(); ToCqlDurationNanos()"),
        (r"inet", "Hash(); ToInetAddress()"),
        (r"blob", "Hash(); ToByteBuffer(64)"),
        (r"list<(.+)>", _list_recipe),
        (r"set<(.+)>", _set_recipe),
        (r"map<([^,]+),(.+)>", _map_recipe),
        (r"frozen<(.+)>", _frozen_recipe),
    ],
)


def library_from_mapping(name: str, type_bindings: Dict[str, str]) -> BindingsLibrary:
    """Build a library from configured ``type pattern -> recipe`` pairs."""
    library = BindingsLibrary(name)
    for pattern, recipe in type_bindings.items():
        library.add_rule(pattern, recipe)
    logger.debug(f"Built bindings library '{name}' with {len(library)} rules")
    return library

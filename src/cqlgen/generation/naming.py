"""Deterministic, collision-checked names for generated ops and bindings.

A naming template is literal text plus optional sections written as
``[pre FIELD post]``. A section renders as ``pre + value + post`` when the
element (or a role hint) supplies a value for FIELD and disappears otherwise:

    [BLOCKNAME--][OPTYPE--][KEYSPACE__][TABLE__][NAME][__MODULO]

renders a table insert in block ``main`` as ``main--insert--ks__t`` and the
binding of column ``id`` of that table as ``ks__t__id``.
"""

import re
from typing import Dict, List, Optional, Tuple, Union
from cqlgen.config.exporter import DEFAULT_NAMING_TEMPLATE
from cqlgen.config.logging import get_logger
from cqlgen.errors import ConfigurationError, NameCollisionError
from cqlgen.ir.schema import ColumnDef, Keyspace, SchemaModel, Table, UserType

logger = get_logger(__name__)

NAMING_FIELDS = (
    "BLOCKNAME",
    "OPTYPE",
    "KIND",
    "KEYSPACE",
    "TABLE",
    "NAME",
    "TYPEDEF",
    "MODULO",
)

_SECTION = re.compile(r"\[([^\[\]A-Z]*)([A-Z]+)([^\[\]A-Z]*)\]")
_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")

NamedElement = Union[Keyspace, UserType, Table, ColumnDef]
# (kind, keyspace, table, name, sorted role hints)
Owner = Tuple[str, Optional[str], Optional[str], str, Tuple[Tuple[str, str], ...]]
Section = Tuple[str, str, str]


def parse_template(template: str) -> List[Union[str, Section]]:
    """
    Split a naming template into literal text and (prefix, FIELD, suffix) sections.

    Raises:
        ConfigurationError: On unbalanced brackets, unknown fields, or a
            template without any field
    """
    pieces: List[Union[str, Section]] = []
    position = 0
    for match in _SECTION.finditer(template):
        if match.start() > position:
            pieces.append(template[position:match.start()])
        prefix, field, suffix = match.groups()
        if field not in NAMING_FIELDS:
            raise ConfigurationError(
                f"naming template '{template}' uses unknown field '{field}'. "
                f"Known fields: {list(NAMING_FIELDS)}"
            )
        pieces.append((prefix, field, suffix))
        position = match.end()
    if position < len(template):
        pieces.append(template[position:])

    literals = "".join(p for p in pieces if isinstance(p, str))
    if "[" in literals or "]" in literals:
        raise ConfigurationError(f"naming template '{template}' has unbalanced brackets")
    if not any(isinstance(p, tuple) for p in pieces):
        raise ConfigurationError(f"naming template '{template}' has no fields")
    return pieces


def naming_fields(element: NamedElement) -> Dict[str, Optional[str]]:
    """Attributes of a schema element that a naming template may refer to."""
    if isinstance(element, Keyspace):
        return {"KIND": "keyspace", "KEYSPACE": None, "TABLE": None, "NAME": element.name}
    if isinstance(element, UserType):
        return {"KIND": "type", "KEYSPACE": element.keyspace, "TABLE": None, "NAME": element.name}
    if isinstance(element, Table):
        return {"KIND": "table", "KEYSPACE": element.keyspace, "TABLE": None, "NAME": element.name}
    if isinstance(element, ColumnDef):
        return {
            "KIND": "column",
            "KEYSPACE": element.keyspace,
            "TABLE": element.table,
            "NAME": element.name,
            "TYPEDEF": element.trimmed_type_def,
        }
    raise TypeError(f"cannot name element of type '{type(element).__name__}'")


def _describe(owner: Owner) -> str:
    kind, keyspace, table, name, hints = owner
    qualified = ".".join(p for p in (keyspace, table, name) if p)
    text = f"{kind} '{qualified}'"
    if hints:
        text += " (" + ", ".join(f"{k}={v}" for k, v in hints) + ")"
    return text


class NamingRegistry:
    """Issues names from a template and remembers who owns each of them.

    One registry belongs to one compile. Asking twice for the same element and
    role hints returns the same name; the same name for a different owner is a
    fatal collision.
    """

    def __init__(self, template: str = DEFAULT_NAMING_TEMPLATE):
        self.template = template
        self._pieces = parse_template(template)
        self._issued: Dict[str, Owner] = {}
        self._known: Dict[str, List[Owner]] = {}

    def name_for(self, element: NamedElement, **hints: object) -> str:
        """
        Render and register the name of an element in a given role.

        Args:
            element: Keyspace, user type, table or column
            **hints: Role hints such as optype, blockname or modulo

        Returns:
            The registered name

        Raises:
            NameCollisionError: If the name is already owned by another element
                or shadows a schema identifier
        """
        fields = naming_fields(element)
        role = {k.lower(): str(v) for k, v in hints.items() if v is not None}
        fields.update({k.upper(): v for k, v in role.items()})

        rendered = []
        for piece in self._pieces:
            if isinstance(piece, str):
                rendered.append(piece)
                continue
            prefix, field, suffix = piece
            value = fields.get(field)
            if value:
                rendered.append(prefix + _UNSAFE.sub("_", value) + suffix)
        name = "".join(rendered)

        owner: Owner = (
            fields["KIND"],
            fields["KEYSPACE"],
            fields["TABLE"],
            fields["NAME"],
            tuple(sorted(role.items())),
        )
        if not name:
            raise ConfigurationError(
                f"naming template '{self.template}' produced an empty name for {_describe(owner)}"
            )
        self._register(name, owner)
        return name

    def _register(self, name: str, owner: Owner) -> None:
        known = self._known.get(name)
        if known and not any(k[:4] == owner[:4] for k in known):
            raise NameCollisionError(
                f"generated name '{name}' for {_describe(owner)} shadows the schema "
                f"identifier of {_describe(known[0])}; adjust naming_template"
            )
        existing = self._issued.get(name)
        if existing is not None and existing != owner:
            raise NameCollisionError(
                f"name '{name}' is claimed by both {_describe(existing)} and "
                f"{_describe(owner)}; adjust naming_template"
            )
        self._issued[name] = owner

    def inform_of_all_known_names(self, model: SchemaModel) -> None:
        """Seed the registry with every identifier the schema itself declares."""
        elements: List[NamedElement] = [*model.keyspaces, *model.types, *model.tables]
        for table in model.tables:
            elements.extend(table.columns)
        for element in elements:
            fields = naming_fields(element)
            owner: Owner = (fields["KIND"], fields["KEYSPACE"], fields["TABLE"], fields["NAME"], ())
            self._known.setdefault(fields["NAME"], []).append(owner)
        logger.debug(f"Naming registry primed with {len(self._known)} schema identifiers")

"""Accumulates the bindings referenced by generated statements."""

from dataclasses import dataclass
from typing import Dict, List, Optional
from cqlgen.config.logging import get_logger
from cqlgen.errors import BindingResolutionError
from cqlgen.generation.naming import NamingRegistry
from cqlgen.ir.schema import ColumnDef
from .library import BindingsLibrary

logger = get_logger(__name__)


@dataclass(frozen=True)
class Binding:
    """A named data generator recipe, referenced in statements as ``{name}``."""

    name: str
    recipe: str

    @property
    def placeholder(self) -> str:
        return "{" + self.name + "}"


class BindingsAccumulator:
    """Resolves columns to bindings and collects them into one bindings table.

    Identical recipes are shared: the second column asking for a recipe that
    already has a binding gets that binding back instead of a new name.
    """

    def __init__(self, namer: NamingRegistry, libraries: List[BindingsLibrary]):
        self.namer = namer
        self.libraries = list(libraries)
        self._by_recipe: Dict[str, Binding] = {}

    def resolve_recipe(self, column: ColumnDef) -> str:
        """
        Find the base recipe for a column's type.

        Raises:
            BindingResolutionError: If no library has a rule for the type
        """
        for library in self.libraries:
            recipe = library.resolve(column.trimmed_type_def)
            if recipe is not None:
                return recipe
        raise BindingResolutionError(
            f"Unable to find a binding for column '{column.full_name}' of type "
            f"'{column.trimmed_type_def}' in libraries "
            f"{[library.name for library in self.libraries]}"
        )

    def for_column(
        self, column: ColumnDef, modifier: Optional[str] = None, **hints: object
    ) -> Binding:
        """
        Get the binding for a column, creating and naming it on first use.

        Args:
            column: Column to bind
            modifier: Optional leading generator stage, e.g. ``"Mod(100L); "``,
                that shapes the values before the type conversion
            **hints: Extra naming hints distinguishing modified bindings

        Returns:
            Binding shared by every request for the same recipe
        """
        recipe = self.resolve_recipe(column)
        if modifier:
            recipe = modifier.strip().rstrip(";") + "; " + recipe

        existing = self._by_recipe.get(recipe)
        if existing is not None:
            return existing

        binding = Binding(name=self.namer.name_for(column, **hints), recipe=recipe)
        self._by_recipe[recipe] = binding
        logger.debug(f"New binding '{binding.name}' for {column.full_name}: {recipe}")
        return binding

    def accumulated_bindings(self) -> Dict[str, str]:
        """Bindings table (name -> recipe) in creation order."""
        return {b.name: b.recipe for b in self._by_recipe.values()}

    def __len__(self) -> int:
        return len(self._by_recipe)

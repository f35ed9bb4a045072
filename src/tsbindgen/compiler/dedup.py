# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Union deduplication: rewrite literal unions that duplicate an enum into references.

A closed literal union (``"a" | "b"``) whose value set equals the wire-value
set of a declared enum is redundant: the enum already describes the same
values on the wire. Such unions are replaced by a reference to the enum. The
rewrite never changes what is serialized, only how the Rust type is named.

The pass works on explicit values instead of tree-walking lookups:

1. ``DeclarationIndex`` maps every declaration path to its item, built once.
2. ``discover_unions`` collects every closed literal union site into a
   ``UnionIndex``.
3. ``match_unions`` pairs union sites with enums by exact value-set equality.
4. The rewrite produces a new tree with matched unions replaced.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from tsbindgen.compiler.diagnostics import DiagnosticKind, Diagnostics
from tsbindgen.model.entities import (
    EnumDef,
    FieldDef,
    Item,
    ModuleDef,
    StructDef,
    TypeAliasDef,
)
from tsbindgen.model.types import IdentifierType, PathType, ReferenceType, TypeRef, UnionType

# ###############
# Public Interface
# ###############

DeclPath = tuple[str, ...]


@dataclass(frozen=True)
class UnionSite:
    """A closed literal union found at a field or type alias position.

    Attributes:
        path: Path of the owning field (modules, struct, field) or alias (modules, alias).
        module_path: Path of the module that contains the owning declaration.
        union: The union itself.
    """

    path: DeclPath
    module_path: DeclPath
    union: UnionType

    @property
    def dotted(self) -> str:
        return ".".join(self.path)

    def values(self) -> frozenset[str | float]:
        return frozenset(self.union.literal_values())


@dataclass
class UnionIndex:
    """All closed literal union sites of a tree, in traversal order."""

    sites: list[UnionSite] = field(default_factory=list)

    def matching(self, values: frozenset[str | float] | set[str | float]) -> list[UnionSite]:
        """Return the sites whose literal set equals *values* exactly."""
        return [site for site in self.sites if site.values() == values]


@dataclass(frozen=True)
class EnumEntry:
    """An enum together with its location in the tree."""

    path: DeclPath
    module_path: DeclPath
    enum: EnumDef


class DeclarationIndex:
    """Path-to-declaration index of a model tree.

    Paths are tuples of display identifiers starting with the root module.
    Names inside a module are also indexed by their source spelling, which
    takes precedence when a source spelling equals another item's display name.
    """

    def __init__(self) -> None:
        self._items: dict[DeclPath, Item] = {}
        self._children: dict[DeclPath, dict[str, DeclPath]] = {}
        self._enums: list[EnumEntry] = []

    @classmethod
    def build(cls, root: ModuleDef) -> DeclarationIndex:
        index = cls()
        for path, module_path, item in _walk(root):
            index._items[path] = item
            index._children.setdefault(module_path, {}).setdefault(item.ident.original, path)
            if isinstance(item, EnumDef):
                index._enums.append(EnumEntry(path=path, module_path=module_path, enum=item))
        for path in index._items:
            index._children[path[:-1]].setdefault(path[-1], path)
        return index

    def resolve(self, path: DeclPath) -> Item | None:
        """Return the declaration at *path*, or None."""
        return self._items.get(path)

    def enums(self) -> list[EnumEntry]:
        """Return every enum in traversal order."""
        return list(self._enums)

    def lookup(self, scope: DeclPath, segments: Sequence[str]) -> DeclPath | None:
        """Resolve a name written inside the module at *scope* to a declaration path.

        Leading ``super`` segments step out of *scope*. Otherwise the name is
        looked up in *scope*, then in each enclosing module, innermost first.

        Returns:
            The path of the declaration, or None if nothing matches.
        """
        ups = 0
        while ups < len(segments) and segments[ups] == "super":
            ups += 1
        if ups:
            if ups >= len(scope):
                return None
            return self._follow(scope[: len(scope) - ups], segments[ups:])
        for depth in range(len(scope), -1, -1):
            path = self._follow(scope[:depth], segments)
            if path is not None:
                return path
        return None

    def _follow(self, module_path: DeclPath, segments: Sequence[str]) -> DeclPath | None:
        if not segments:
            return None
        path = module_path
        for segment in segments:
            found = self._children.get(path, {}).get(segment)
            if found is None:
                return None
            path = found
        return path


def discover_unions(root: ModuleDef) -> UnionIndex:
    """Collect every closed literal union at a struct field or type alias position."""
    index = UnionIndex()
    for path, module_path, item in _walk(root):
        if isinstance(item, StructDef):
            for member in item.members:
                if _is_candidate(member.type):
                    index.sites.append(
                        UnionSite(path=(*path, member.ident.display), module_path=module_path, union=member.type)
                    )
        elif isinstance(item, TypeAliasDef) and _is_candidate(item.definition):
            index.sites.append(UnionSite(path=path, module_path=module_path, union=item.definition))
    return index


def match_unions(
    declarations: DeclarationIndex,
    unions: UnionIndex,
    diagnostics: Diagnostics,
) -> dict[DeclPath, list[str]]:
    """Pair union sites with the enums they duplicate.

    Every site whose literal set equals an enum's wire-value set is matched. A
    site equal to several enums keeps the first enum in traversal order and
    an ambiguity diagnostic is recorded.

    Returns:
        Mapping from site path to the relative path of the enum it should reference.
    """
    rewrites: dict[DeclPath, list[str]] = {}
    claimed_by: dict[DeclPath, EnumEntry] = {}
    for entry in declarations.enums():
        for site in unions.matching(entry.enum.wire_values()):
            if site.path in claimed_by:
                diagnostics.report(
                    DiagnosticKind.AMBIGUOUS_MATCH,
                    f"Union matches both '{'.'.join(claimed_by[site.path].path)}' and "
                    f"'{'.'.join(entry.path)}'; using the first",
                    site.dotted,
                )
                continue
            claimed_by[site.path] = entry
            rewrites[site.path] = relative_path(entry.path, entry.module_path, site.module_path)
    return rewrites


def relative_path(target: DeclPath, target_module: DeclPath, from_module: DeclPath) -> list[str]:
    """Return the path to *target* as seen from inside *from_module*.

    The longest common module prefix is dropped; each module level of
    *from_module* below that prefix adds a leading ``super``.
    """
    common = 0
    for ours, theirs in zip(target_module, from_module):
        if ours != theirs:
            break
        common += 1
    return ["super"] * (len(from_module) - common) + list(target[common:])


def deduplicate(root: ModuleDef, diagnostics: Diagnostics) -> ModuleDef:
    """Return a copy of *root* where unions duplicating an enum reference that enum."""
    declarations = DeclarationIndex.build(root)
    unions = discover_unions(root)
    rewrites = match_unions(declarations, unions, diagnostics)
    return _Rewriter(rewrites).module(root, ())


# ################
# Implementation
# ################


def _is_candidate(type_ref: TypeRef) -> bool:
    return isinstance(type_ref, UnionType) and type_ref.is_closed_literal()


def _walk(
    module: ModuleDef,
    parent: DeclPath = (),
) -> Iterator[tuple[DeclPath, DeclPath, Item]]:
    """Yield (path, containing module path, item) in depth-first pre-order."""
    module_path = (*parent, module.ident.display)
    if not parent:
        yield module_path, (), module
    for item in module.contents:
        path = (*module_path, item.ident.display)
        yield path, module_path, item
        if isinstance(item, ModuleDef):
            yield from _walk(item, module_path)


def _reference(segments: list[str], original: TypeRef) -> ReferenceType:
    target: IdentifierType | PathType
    if len(segments) == 1:
        target = IdentifierType(name=segments[0])
    else:
        target = PathType(segments=[IdentifierType(name=s) for s in segments])
    return ReferenceType(target=target, array=original.array, optional=original.optional)


class _Rewriter:
    """Rebuilds the tree, replacing matched unions."""

    def __init__(self, rewrites: dict[DeclPath, list[str]]) -> None:
        self._rewrites = rewrites

    def module(self, module: ModuleDef, parent: DeclPath) -> ModuleDef:
        module_path = (*parent, module.ident.display)
        return module.model_copy(update={"contents": [self._item(item, module_path) for item in module.contents]})

    def _item(self, item: Item, module_path: DeclPath) -> Item:
        path = (*module_path, item.ident.display)
        if isinstance(item, ModuleDef):
            return self.module(item, module_path)
        if isinstance(item, StructDef):
            return item.model_copy(update={"members": [self._field(member, path) for member in item.members]})
        if isinstance(item, TypeAliasDef) and path in self._rewrites:
            return item.model_copy(update={"definition": _reference(self._rewrites[path], item.definition)})
        return item

    def _field(self, member: FieldDef, struct_path: DeclPath) -> FieldDef:
        path = (*struct_path, member.ident.display)
        if path not in self._rewrites:
            return member
        return member.model_copy(update={"type": _reference(self._rewrites[path], member.type)})

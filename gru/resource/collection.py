"""Collections of resources and their dependency graph."""

from __future__ import annotations

from collections.abc import Iterable

from gru.resource.base import Resource, ResourceError


class Collection(dict[str, Resource]):
    """Resources keyed by their ids."""

    def dependency_graph(self) -> dict[str, list[str]]:
        """Return each resource id mapped to the ids it depends on.

        Both required resources and subscribed-to resources count as
        dependencies. Raises ResourceError for a reference to an unknown id.
        """
        graph: dict[str, list[str]] = {rid: [] for rid in self}
        for rid, resource in self.items():
            edges = graph[rid]
            for dep in resource.require:
                if dep not in self:
                    raise ResourceError(f"{rid} wants {dep}, which does not exist")
                if dep not in edges:
                    edges.append(dep)
            for dep in resource.subscribe:
                if dep not in self:
                    raise ResourceError(f"{rid} subscribes to {dep}, which does not exist")
                if dep not in edges:
                    edges.append(dep)
        return graph


def create_collection(resources: Iterable[Resource]) -> Collection:
    """Build a collection, raising ResourceError on a duplicate id."""
    collection = Collection()
    for resource in resources:
        rid = resource.id()
        if rid in collection:
            raise ResourceError(f"Duplicate resource declaration for {rid}")
        collection[rid] = resource
    return collection
from sqlalchemy import Select, false

from ..auth.scope import ScopeFilter


def apply_scope(
    query: Select,
    scope: ScopeFilter,
    *,
    owner_column=None,
    property_column=None,
    vendor_column=None,
) -> Select:
    """Narrow a query to the rows a scope filter admits.

    A filter field the entity has no column for matches nothing.
    """
    if scope.unrestricted:
        return query
    if scope.owner_id is not None:
        if owner_column is None:
            return query.where(false())
        query = query.where(owner_column == scope.owner_id)
    if scope.property_ids is not None:
        if property_column is None:
            return query.where(false())
        query = query.where(property_column.in_(list(scope.property_ids)))
    if scope.assigned_vendor_id is not None:
        if vendor_column is None:
            return query.where(false())
        query = query.where(vendor_column == scope.assigned_vendor_id)
    return query

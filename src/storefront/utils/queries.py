"""Repository query helpers shared by handlers and API read paths."""

from protean.utils.globals import current_domain

PAGE_SIZE = 100


def fetch_all(aggregate_cls, **filters):
    """Return every stored ``aggregate_cls`` matching ``filters``, across result pages."""
    dao = current_domain.repository_for(aggregate_cls)._dao
    query = dao.query.filter(**filters) if filters else dao.query

    results = []
    offset = 0
    while True:
        page = query.offset(offset).limit(PAGE_SIZE).all()
        results.extend(page.items)
        if not page.has_next:
            break
        offset += PAGE_SIZE
    return results


def fetch_one(aggregate_cls, **filters):
    """Return the first match for ``filters`` or ``None``."""
    dao = current_domain.repository_for(aggregate_cls)._dao
    items = dao.query.filter(**filters).limit(1).all().items
    return items[0] if items else None


def delete(aggregate):
    current_domain.repository_for(type(aggregate))._dao.delete(aggregate)

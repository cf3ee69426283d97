from math import ceil

def _as_int(value, default):
    """
    Convert any value to int, falling back to ``default`` if conversion
    fails or the value is ``None``.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def paginate(query, page, limit, schema, key="data"):
    """
    Apply pagination to a SQLAlchemy *query* and return a dictionary
    containing serialized items plus pagination metadata.

    Args:
        query: SQLAlchemy query object, already filtered and ordered.
        page (int | None): Current page number (1-based). If ``None`` or not
            numeric, defaults to 1.
        limit (int | None): Items per page. Defaults to 10, with a hard
            upper limit of 100.
        schema: Marshmallow schema used to serialize each item.
        key (str): Name of the list in the returned payload.

    Returns:
        dict: ``{key: [...], "pagination": {...}}``
    """
    # Sanitize parameters -----------------------------------------------------
    page = max(1, _as_int(page, 1))
    limit = min(100, max(1, _as_int(limit, 10)))

    # -------------------------------------------------------------------------
    total = query.order_by(None).count()
    pages = ceil(total / limit) if total else 0

    items = (
        query.limit(limit)
        .offset((page - 1) * limit)
        .all()
    )

    pagination = {
        "total": total,
        "pages": pages,
        "page": page,
        "limit": limit,
        "has_prev": page > 1,
        "has_next": page < pages,
    }

    return {key: schema.dump(items), "pagination": pagination}

import math


def paginate(query, page: int, limit: int) -> tuple[list, int]:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def page_body(items: list, total: int, page: int, limit: int) -> dict:
    return {
        "success": True,
        "data": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }

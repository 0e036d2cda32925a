from flask import current_app, request


def page_args():
    """Read ``page``/``limit`` from the query string, clamped to config."""
    cfg = current_app.config
    page = request.args.get("page", 1, type=int)
    limit = request.args.get("limit", cfg["DEFAULT_PAGE_SIZE"], type=int)
    page = max(page or 1, 1)
    limit = min(max(limit or 1, 1), cfg["MAX_PAGE_SIZE"])
    return page, limit


def paginate(query, page: int, limit: int):
    result = query.paginate(page=page, per_page=limit, error_out=False)
    return result.items, {
        "page": page,
        "limit": limit,
        "total_count": result.total,
        "total_pages": result.pages,
        "has_next_page": result.has_next,
        "has_prev_page": result.has_prev,
    }

from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    views = [e for e in events if e["type"] == "view"]
    total = len(views)

    times = [v["response_time_ms"] for v in views if "response_time_ms" in v]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    avg_results = round(sum(v.get("results", 0) for v in views) / total, 1) if total else 0.0

    # Top types
    type_counter: Counter[str] = Counter()
    for v in views:
        if v.get("type_filter"):
            type_counter[v["type_filter"]] += 1
    top_types = [{"name": n, "count": c} for n, c in type_counter.most_common(10)]

    # Top tags
    tag_counter: Counter[str] = Counter()
    for v in views:
        for t in v.get("tag_filters", []) or []:
            tag_counter[t] += 1
    top_tags = [{"name": n, "count": c} for n, c in tag_counter.most_common(10)]

    # Price ceiling usage
    price_counter: Counter[str] = Counter()
    for v in views:
        if v.get("price_ceiling"):
            price_counter[v["price_ceiling"]] += 1
    price_usage = dict(price_counter)

    # Filter usage rates
    filter_counts = {"type": 0, "tags": 0, "price": 0, "open_only": 0, "distance": 0}
    for v in views:
        if v.get("type_filter"):
            filter_counts["type"] += 1
        if v.get("tag_filters"):
            filter_counts["tags"] += 1
        if v.get("price_ceiling"):
            filter_counts["price"] += 1
        if v.get("open_only"):
            filter_counts["open_only"] += 1
        if v.get("sorted_by_distance"):
            filter_counts["distance"] += 1
    filter_usage = {
        k: round(c / total * 100, 1) if total else 0.0
        for k, c in filter_counts.items()
    }

    empty_views = sum(1 for v in views if v.get("results", 0) == 0)

    return {
        "total_views": total,
        "avg_response_time_ms": avg_time,
        "avg_results": avg_results,
        "empty_views": empty_views,
        "top_types": top_types,
        "top_tags": top_tags,
        "price_ceiling_usage": price_usage,
        "filter_usage": filter_usage,
        "place_changes": sum(1 for e in events if e["type"] == "place_change"),
    }

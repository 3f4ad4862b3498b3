"""Pipe-through defaults.

Each pipeline identifier a route goes through may map to a bundle of
default headers, query params and body fragments. Bundles of one route are
folded left to right, later bundles winning.
"""

MERGED_KEYS = ("headers", "query_params", "body")


def empty_pipe_through() -> dict:
    return {key: {} for key in MERGED_KEYS}


def deep_merge(left: dict, right: dict) -> dict:
    """Merge ``right`` into a copy of ``left``; nested dicts merge, anything else is replaced."""
    merged = dict(left)
    for key, value in right.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_pipe_through(mappings: list[dict]) -> dict:
    """Fold bundles left to right.

    ``headers``, ``query_params`` and ``body`` deep-merge; any other key is
    replaced outright by the later bundle.
    """
    result: dict = {}
    for mapping in mappings:
        for key, value in mapping.items():
            if key in MERGED_KEYS and isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value
    return result


def pipe_through_mapping(pipe_through: list[str] | None, config) -> dict:
    """Resolve a route's pipeline identifiers to its merged default bundle."""
    table = config.pipe_through_mapping
    if pipe_through is None or table is None:
        return empty_pipe_through()

    bundles = [table[pt] for pt in pipe_through if table.get(pt) is not None]
    return merge_pipe_through([empty_pipe_through(), *bundles])

def _quote(text):
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def filter_summary(filter_text, visible, total):
    if not filter_text:
        return ""
    return f"Filter: {_quote(filter_text)} ({visible}/{total} lines)"


def debug_summary(size, width, height, selection, offset):
    return f"size={size} wid={width} hei={height} sel={selection} off={offset}"


def render_status(context):
    """
    context keys: prompt, debug, filter, visible, total
    A live prompt wins over the debug line, which wins over the filter summary.
    """
    if context.get("prompt") is not None:
        return context["prompt"]
    if context.get("debug"):
        return context["debug"]
    return filter_summary(
        context.get("filter", ""),
        context.get("visible", 0),
        context.get("total", 0),
    )

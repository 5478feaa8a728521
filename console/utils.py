def apply_style(text: str, style: str):
    return f"[{style}]{text}[/{style}]"

def path(text):
    return apply_style(text, "path")

def metric(text):
    return apply_style(text, "metric.value")

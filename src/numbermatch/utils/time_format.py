def format_time(seconds: int) -> str:
    """Render a countdown as ``MM:SS``; negative values clamp to zero."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"

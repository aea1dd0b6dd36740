"""
Display helpers for leaderboard consumers.
"""


def format_rank(rank: int) -> str:
    """Ordinal text for a rank: 1st, 2nd, 3rd, 4th, 11th, 22nd."""
    rank = int(rank)
    if rank < 1:
        raise ValueError(f"Rank must be positive, got {rank}")
    if 10 <= rank % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(rank % 10, 'th')
    return f"{rank}{suffix}"


def format_percentile(value: float) -> str:
    """Whole-number percentile text, e.g. 87th."""
    whole = int(round(value))
    if whole == 0:
        return "0th"
    return format_rank(whole)

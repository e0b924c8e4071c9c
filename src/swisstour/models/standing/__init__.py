from swisstour.models.standing.standing import Standing

__all__ = ["Standing"]

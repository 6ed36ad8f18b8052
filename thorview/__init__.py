"""Raw multi-frame image sequence loading and inspection."""

__version__ = "1.0.0"
__all__ = ["image_sequence", "image_loader"]
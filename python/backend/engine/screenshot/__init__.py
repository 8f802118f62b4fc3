from backend.engine.screenshot.extractor import ExtractedProgress, ScreenshotExtractor

__all__ = ["ExtractedProgress", "ScreenshotExtractor"]

#!/usr/bin/env python3
"""
Basic usage example for content-safety-pipeline.
"""

from content_safety import (
    FakeProfileAnalyzer,
    StockPhotoCheck,
    analyze_behavior,
    check_message,
    check_profile_fields,
    encode,
    filter_profanity,
    get_violations,
    sanitize,
    validate_name,
)
from content_safety.models import AnalyzerConfig, Photo


def sanitization_example():
    """Example of sanitizing and encoding user text."""
    print("=== Sanitization Example ===")

    samples = [
        "<script>alert('xss')</script>Hi!",
        "&#60;script&#62;alert(document.cookie)",
        "<img src=x onerror=alert(1)>",
        "  Normal   message   with  spacing  ",
        "<scr\nipt>java\nscript:alert(1)",
    ]

    for sample in samples:
        print(f"  {sample!r}")
        print(f"    standard: {sanitize(sample)!r}")
        print(f"    strict:   {sanitize(sample, 'strict')!r}")

    # Encode at render time, whatever the sanitization level
    print(f"  html: {encode('Tom & Jerry <3', 'html')}")
    print(f"  url:  {encode('coffee near me', 'url')}")


def moderation_example():
    """Example of checking messages and names against the content policy."""
    print("\n=== Moderation Example ===")

    message = "CALL ME AT 555-123-4567!!!!!"
    print(f"Message: {message}")
    for violation in get_violations(message):
        print(f"  - {violation.description}")

    result = check_message(message)
    print(f"  Allowed: {result.allowed}")

    print(f"Filtered: {filter_profanity('what the hell is this')}")

    for name in ["Jane Doe", "SexyGirl", "John123456"]:
        validation = validate_name(name)
        print(f"Name {name!r}: {'valid' if validation else validation.reason}")

    fields = check_profile_fields("  Jane [Doe] ", "FOLLOW ME ON INSTAGRAM NOW")
    print(f"Profile fields accepted: {fields.accepted}")
    for reason in fields.reasons:
        print(f"  - {reason}")


class KnownStockPhotos(StockPhotoCheck):
    """Stock photo check backed by a fixed set of known image sources."""

    def __init__(self, known_sources):
        self.known_sources = set(known_sources)

    def is_stock_photo(self, photo):
        return photo.source in self.known_sources


def profile_analysis_example():
    """Example of fake profile and behaviour analysis."""
    print("\n=== Profile Analysis Example ===")

    analyzer = FakeProfileAnalyzer(
        stock_photo_check=KnownStockPhotos({"stock-beach.jpg"}),
        config=AnalyzerConfig(max_workers=2, plugin_timeout=2.0),
    )

    photos = [
        Photo(width=1080, height=1350, source="selfie.jpg"),
        Photo(width=6000, height=4000, source="stock-beach.jpg"),
    ]
    analysis = analyzer.analyze_profile(
        photos, bio="Love to laugh. DM me on instagram", name="Sarah", location=None
    )

    print(f"Suspicion score: {analysis.suspicion_score:.2f}")
    print(f"Recommendation: {analysis.recommendation.value}")
    for indicator in analysis.indicators:
        print(f"  - {indicator.description}")

    behavior = analyze_behavior(
        messages_sent=150, messages_received=0, matches_count=5, account_age_seconds=3600
    )
    print(f"Behavior score: {behavior.suspicion_score:.2f}")
    for indicator in behavior.indicators:
        print(f"  - {indicator.description}")


def main():
    """Run all examples."""
    print("Content Safety Pipeline - Usage Examples")
    print("=" * 40)

    sanitization_example()
    moderation_example()
    profile_analysis_example()

    print("\n=== Examples Complete ===")
    print("For more advanced usage, see the CLI tools:")
    print("  content-safety-sanitize --help")
    print("  content-safety-moderate --help")
    print("  content-safety-analyze --help")
    print("  content-safety-config --help")


if __name__ == "__main__":
    main()

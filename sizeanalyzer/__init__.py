"""Size-reduction analyzer for Android Gradle projects."""

__version__ = "0.1.0"

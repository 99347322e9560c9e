"""copyguard -- copyright safety validation for AI-generated news summaries."""

__version__ = "0.1.0"

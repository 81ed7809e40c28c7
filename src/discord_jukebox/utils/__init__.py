"""Cross-cutting helpers: logging formatters and message formatting."""

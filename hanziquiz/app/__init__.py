"""Session-level plumbing: event bus, tracing and the writer session."""

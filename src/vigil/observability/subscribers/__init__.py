"""Event subscribers: route alerting events to logs, files and metrics."""

"""Shared cross-cutting helpers (telemetry, datetime and ID utilities)."""

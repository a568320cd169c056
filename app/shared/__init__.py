"""Cross-cutting helpers: telemetry and UTC time. No audit rules live here."""

"""HTTP API for ReactorCalc (requires the ``api`` extra)."""

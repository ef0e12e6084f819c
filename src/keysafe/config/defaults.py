"""Starter .keysafe.toml template."""

DEFAULT_TOML = """\
# KeySafe Configuration
version = "1.0"

[scan]
fail_on = "high"          # low | medium | high | critical — fail at or above this level
max_file_size_kb = 512
# extensions = [".js", ".ts"]   # empty = every supported suffix

[output]
show_summary = true

[rules]
# enable = ["PRIVATE_KEYS"]     # empty = all enabled
# disable = []

[ignore]
# paths = ["node_modules/*", "test/fixtures/*"]
# rules = []

[ci]
# full_redaction = true
# max_findings = 50              # circuit-breaker

[logging]
# level = "WARNING"              # DEBUG | INFO | WARNING | ERROR
"""

"""Starter .rulesets.toml template."""

DEFAULT_TOML = """\
# rulesets configuration
version = "1.0"

[evaluation]
force = false                    # unsatisfied but forceable rules count as passed
fail_on_not_applicable = false   # exit 1 when the whole ruleset does not apply

[output]
format = "terminal"              # terminal | json
show_summary = true

[rules]
# modules = ["myapp.rules"]      # imported so their rules register themselves
declarations = ".rulesets"       # directory of YAML ruleset declarations

[logging]
level = "warning"                # debug | info | warning | error
format = "console"               # console | json
"""

"""Starter .todoissue.toml template."""

DEFAULT_TOML = """\
# todoissue configuration
version = "1.0"

[markers]
signatures = ["TODO"]     # regex fragments, tried in order
# signatures = ["TODO(?:\\\\(\\\\w+\\\\))?"]   # also TODO(scope): ..., use with the [labels] patterns
comments = ["//"]         # comment-syntax regex fragments, tried before signatures
trim = " :\\""            # characters trimmed from both ends of the title
# max_line_length = 500   # never look for markers in longer lines (minified code)
# max_title_length = 120

[labels]
issue_label = "TODO"      # every issue gets this label
# inline_pattern = "\\\\((\\\\w+)\\\\)"   # TODO(security): ... -> label "security",
#                                       # needs the TODO(scope) signature in [markers]
# strip_pattern = "\\\\(\\\\w+\\\\)"      # removed from the title

[snippet]
lines_before = 3          # 0..15
lines_after = 7           # 0..15
indent_char = "\\t"
# syntax = "go"           # fenced code block tag, default: file extension

[paths]
# include = ["src/"]
# exclude = ["vendor/", "third_party/"]
# file_pattern = "\\\\.(go|cs)$"

[github]
# repository = "owner/name"
# delay_ms = 1000         # pause between API calls
"""

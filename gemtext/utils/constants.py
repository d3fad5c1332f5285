APP_ORG = "GemText"
APP_NAME = "GemText"
APP_DIR_NAME = "GemText"

CSS_PREVIEW = """
body { font-family: "Segoe UI", Helvetica, Arial, sans-serif; color: #111111; background-color: #ffffff; }
pre { background-color: #f4f6f8; padding: 8px; }
code { background-color: #f4f6f8; font-family: monospace; }
blockquote { margin-left: 16px; color: #555555; }
table { border-collapse: collapse; }
th, td { border: 1px solid #dddddd; padding: 4px 8px; }
a { color: #b8860b; text-decoration: none; }
del { color: #555555; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""

HELP_MARKDOWN = """\
### Markdown

| Type | To get |
|---|---|
| `# Heading` | Heading (up to `######`) |
| `**bold**` | **bold** |
| `*italic*` | *italic* |
| `~~strike~~` | ~~strike~~ |
| `` `code` `` | `code` |
| `[text](https://example.com)` | link |
| `- item` | bullet list |
| `1. item` | numbered list |
| `- [ ] task` | task list |
| `> quote` | block quote |

Fence code with three backticks. Save (Ctrl+S) or leaving edit mode writes the file.
"""

OPEN_FILE_FILTER = "Markdown (*.md *.markdown *.mdown);;Text (*.txt);;All files (*)"
NEW_FILE_STEM_FORMAT = "Note %Y-%m-%d %H.%M.%S"
DEFAULT_FILE_EXTENSION = "md"

SETTINGS_GEOMETRY = "window/geometry"

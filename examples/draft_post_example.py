"""Minimal example: load a post drafted in the flat text format."""

from pathlib import Path
from tempfile import TemporaryDirectory

from wp_struct import FlatFileParser, Post, serialize


DRAFT = """\
# drafted offline, uploaded later
post_title: Hello
  World
post_content: body text
terms: [{"name": "news", "taxonomy": "category"}]
custom_fields: [{"key": "mood", "value": "happy"}]
ping_status: null
"""


def main() -> None:
    """Parse a draft, populate a Post and print the struct sent to the API."""
    with TemporaryDirectory() as tmp:
        path = Path(tmp) / "draft.txt"
        _ = path.write_text(DRAFT, encoding="utf-8")

        result = FlatFileParser().parse_file(path)
        print("struct:", result.struct)
        print("diagnostics:", result.diagnostics)

        post = Post.from_file(path)
        print(f"{post=}")
        print("outgoing:", serialize(post))


if __name__ == "__main__":
    main()

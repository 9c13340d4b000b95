import logging
import re
from typing import Dict

import frontmatter
import yaml

from postrecord.errors import (
    InvalidFrontMatterSyntax,
    MalformedFrontMatter,
    MissingRequiredField,
)
from postrecord.schemas.post import Post

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("layout", "title")
RECOGNIZED_FIELDS = ("layout", "title", "keywords")

# Front matter begins on document line 2, right after the opening delimiter.
_FIRST_FRONT_MATTER_LINE = 2


class PostFrontMatterHandler(frontmatter.YAMLHandler):
    """
    YAML front matter handler with strict delimiters.

    Only a line that is exactly `---` opens or closes the block, and the
    delimiter's line ending is consumed so the body starts on the next line
    unchanged. Values are loaded as plain strings, never coerced to dates,
    numbers or booleans.
    """

    FM_BOUNDARY = re.compile(r"^---(?:\r?\n|\Z)", re.MULTILINE)

    def load(self, fm: str, **kwargs) -> Dict[str, str]:
        lines = fm.splitlines()

        def syntax_error(message: str, mark) -> InvalidFrontMatterSyntax:
            if mark is None:
                return InvalidFrontMatterSyntax(message)
            index = min(mark.line, max(len(lines) - 1, 0))
            line_text = lines[index] if lines else ""
            return InvalidFrontMatterSyntax(
                message, index + _FIRST_FRONT_MATTER_LINE, line_text
            )

        try:
            root = yaml.compose(fm, Loader=yaml.BaseLoader)
        except yaml.MarkedYAMLError as e:
            raise syntax_error(e.problem or "Invalid YAML", e.problem_mark) from e
        except yaml.YAMLError as e:
            raise InvalidFrontMatterSyntax(f"Invalid YAML: {e}") from e
        except RecursionError:
            raise InvalidFrontMatterSyntax("Front matter is nested too deeply") from None

        if root is None:
            return {}
        if not isinstance(root, yaml.MappingNode):
            raise syntax_error("Expected `key: value` lines", root.start_mark)

        metadata: Dict[str, str] = {}
        for key_node, value_node in root.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise syntax_error("Keys must be plain strings", key_node.start_mark)
            key = key_node.value
            if not isinstance(value_node, yaml.ScalarNode):
                raise syntax_error(
                    f"Value of {key!r} must be a string", value_node.start_mark
                )
            if key in metadata:
                raise syntax_error(f"Duplicate key {key!r}", key_node.start_mark)
            metadata[key] = value_node.value
        return metadata


def parse(raw_text: str) -> Post:
    """
    Parse one document into a Post.

    Raises MalformedFrontMatter, InvalidFrontMatterSyntax or
    MissingRequiredField. The body is everything after the closing
    delimiter line, byte for byte.
    """
    handler = PostFrontMatterHandler()
    text = raw_text.removeprefix("\ufeff")

    if not handler.detect(text):
        raise MalformedFrontMatter(
            "Document must start with a '---' front matter delimiter"
        )
    try:
        fm, body = handler.split(text)
    except ValueError:
        raise MalformedFrontMatter(
            "Front matter is missing its closing '---' delimiter"
        ) from None

    metadata = handler.load(fm)

    missing = [name for name in REQUIRED_FIELDS if name not in metadata]
    if missing:
        raise MissingRequiredField(*missing)

    return Post(
        layout=metadata["layout"],
        title=metadata["title"],
        keywords=metadata.get("keywords"),
        body=body,
        extra={k: v for k, v in metadata.items() if k not in RECOGNIZED_FIELDS},
    )


def dumps(post: Post) -> str:
    """
    Serialize a Post back into a front matter document.

    The body follows the closing delimiter unchanged, so parsing the result
    gives back an equal Post.
    """
    handler = PostFrontMatterHandler()
    metadata = handler.export(post.metadata, sort_keys=False)
    return (
        f"{handler.START_DELIMITER}\n{metadata}\n{handler.END_DELIMITER}\n{post.body}"
    )

"""Editor command line construction."""

FILE_PLACEHOLDER = "%1"
LINE_PLACEHOLDER = "%2"
COLUMN_PLACEHOLDER = "%3"


class MissingFilePlaceholderError(ValueError):
    """Error when an argument template has no file placeholder."""

    def __init__(self, template: str) -> None:
        """Initialize with the argument template."""
        self.template = template
        super().__init__(
            f"No {FILE_PLACEHOLDER} file placeholder in arguments:"
            f" {template!r}"
        )


def adjust_column(column: int, line_text: str, tab_size: int) -> int:
    """Expand tabs before column to tab_size columns each.

    Counts the tabs from index column-1 down to the start of the line, so a
    tab at the target column itself is counted too.
    """
    if tab_size <= 0 or column <= 0 or not line_text:
        return column
    count = line_text[:column].count("\t")
    return column + count * tab_size - count


def has_file_placeholder(template: str) -> bool:
    """Check whether the argument template references the file."""
    return FILE_PLACEHOLDER in template


def build_arguments(
    template: str,
    path: str,
    line: int,
    column: int,
    *,
    use_quotes: bool = False,
) -> str:
    """Expand the %1, %2 and %3 placeholders of an argument template.

    Raises:
        MissingFilePlaceholderError: The template has no %1 placeholder.
    """
    if not has_file_placeholder(template):
        raise MissingFilePlaceholderError(template)
    if use_quotes:
        path = f'"{path}"'
    arguments = template.replace(FILE_PLACEHOLDER, path)
    arguments = arguments.replace(LINE_PLACEHOLDER, str(line))
    return arguments.replace(COLUMN_PLACEHOLDER, str(column))

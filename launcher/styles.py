class Styles:
    TABLE_BORDER = "blue"

    # Status Colors
    STATUS_OK = "bold green"
    STATUS_WARNING = "bold yellow"
    STATUS_ERROR = "bold red"

    # Text
    TITLE = "bold cyan"
    SUBTITLE = "dim white"

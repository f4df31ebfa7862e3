"""
Process-wide switches.

Plain module attributes, read every time a parser runs, so they can be flipped at any point:
```
import quillparse.config
quillparse.config.debug = True
```
"""

debug: bool = False
"""Log every labelled parser attempt and failure at the DEBUG level of the `quillparse` loggers."""

eager_choice: bool = True
"""
When true, `Parser.or_()` runs both alternatives before picking one.

When false, the right alternative only runs if the left one fails. Both give the same results.
"""

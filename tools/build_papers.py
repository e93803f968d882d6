#!/usr/bin/env python3
"""Regenerate papers/index.html (run from the site root, e.g. in CI).

Same as ``papers-page``; any arguments are passed through.
"""

from papers_page.build import main

if __name__ == "__main__":
    main()

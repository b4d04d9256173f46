"""Common literal values used across space_pages.

These constants keep filenames and reserved slugs centralized so the content
loader, navigation builder, generators, and tests import the same values
without drifting. Intended for internal use within the space_pages package.

Examples
--------
>>> from space_pages import _constants
>>> _constants.META_FILENAME
'_meta.yaml'
>>> ".mdx" in _constants.CONTENT_SUFFIXES
True
"""

META_FILENAME = "_meta.yaml"
CONTENT_SUFFIXES = (".md", ".mdx")
INDEX_SLUG = "index"
PAGE_MANIFEST_FILENAME = "_pages.json"
PYGMENTS_CSS_PATH = "assets/pygments.css"

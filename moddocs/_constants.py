"""Common literal values used across moddocs.

These constants keep namespaces, folder names, and ordering defaults
centralized so the enumerators, mappers, navigation builder, and tests can
import the same values without drifting. Intended for internal use within the
moddocs package.

Examples
--------
>>> from moddocs import _constants
>>> _constants.DOCS_NAMESPACE + ":" + "module1/topic"
'docs:module1/topic'
>>> _constants.MODULE_INDEX_NUMBER < _constants.DEFAULT_NUMBER
True
"""

DOCS_NAMESPACE = "docs"
API_NAMESPACE = "apidocs"
ID_SEPARATOR = ":"
PATH_SEPARATOR = "/"

INDEX_BASENAME = "index"
DEFAULT_DOCS_DIR = "docs"
DEFAULT_LIB_DIR = "lib"
DEFAULT_SERVICES_DIR = "services"
DEFAULT_DOC_EXTENSIONS = (".json", ".yaml", ".yaml.md")
DEFAULT_API_EXTENSIONS = (".py",)

DEFAULT_DOCS_BASE_URL = "/docs"
DEFAULT_API_BASE_URL = "/docs/api"

MODULE_INDEX_NUMBER = "0"
DEFAULT_NUMBER = "9000"

# src/dircontents/config.py

DEFAULT_PROPERTIES_FILE = "config.properties"

# 1 MB default
DEFAULT_MAX_FILE_SIZE = 1024 * 1024

BINARY_SAMPLE_SIZE = 64

SEPARATOR = "=" * 16

OUTPUT_SUFFIX = "_contents.txt"

PROPERTY_KEYS = {
    "max_file_size": "max.file.size",
    "excluded_dirs": "excluded.dirs",
    "excluded_extensions": "excluded.extensions",
    "excluded_files": "excluded.files",
}

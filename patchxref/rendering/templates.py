OVERVIEW_HEADER = "## Overall Summary"
PATCHES_HEADER = "## Patches"
FILE_DIFFS_HEADER = "## File Diffs"
INDIVIDUAL_HEADER = "### Individual Diffs"

NO_COMMON_FILES = "No files are present in all patches"
NO_PATCHES = "No patch files loaded. Upload .patch or .diff files to view their contents."
NO_CONTRIBUTORS = "No loaded patch touches this file."
NO_CHANGES = "No changes found between these two patches."
COMPARISON_UNAVAILABLE = (
    "> Could not generate comparison diff. Showing individual diffs instead."
)
NO_FILE_CHANGES = "_No file changes._"
NO_HUNKS = "(no content changes)"

"""
semtag CLI - Command-line interface for latest-version selection.

Commands:
- latest: Print the latest version found in git tags, a file or stdin
- rewrite: Stamp a version into files using regex replacements
- config: Show or change the semtag configuration
"""

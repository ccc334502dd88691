"""DirBlur command line tools."""

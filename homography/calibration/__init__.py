"""DLT system construction, conditioning and solving."""

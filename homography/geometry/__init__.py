"""Points, lines and their correspondences."""

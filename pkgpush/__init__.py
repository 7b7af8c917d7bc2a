"""pkgpush - publish Python packages to a package registry."""

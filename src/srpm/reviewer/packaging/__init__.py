"""
The `packaging` sub-package contains modules that work on the source package
itself, before any review takes place.

This includes:
- Extracting the package identity and classifying the archive members.
- Verifying the packaged build recipe against the reviewer's reference copy.
- Orchestrating builds through local, mock and koji build backends.
"""

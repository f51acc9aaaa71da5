"""Infrastructure layer — filesystem, image cache database, compilers, dev server.

This layer depends on stdlib and third-party libs (SQLAlchemy, wcmatch,
libsass, lesscpy, dukpy, Pillow, minify-html, livereload).
The service layer bridges between domain types and infrastructure.
"""

"""Test suite for class-version.

Test Structure:
- domain/: reflection models, name filter, traversal adapter, serializer
- frontends/: libclang and DWARF declaration sources
- application/: extractor orchestration and output handling
- config/: configuration loading and validation
- infrastructure/: logging helpers

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m "not integration"  # Skip tests that need libclang
"""

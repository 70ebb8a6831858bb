"""p-monitor Test Suite.

Test Organization:
    tests/
        unit/
            pmonitor/
                core/       - Config, models and snapshot store
                collectors/ - Disk, memory, CPU, thermal and GPU probes
                monitors/   - Collection loop
                utils/      - Formatting, platform and logging helpers
            test_main.py    - Entry point
        conftest.py         - Pytest configuration and global fixtures

Running Tests:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/unit/pmonitor/collectors/test_gpu.py

    # Run tests matching pattern
    pytest -k thermal

    # Run only unit tests
    pytest -m unit
"""

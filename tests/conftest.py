"""
Test Configuration
==================

Pytest fixtures and test configuration for loomer.
"""

import pytest


@pytest.fixture
def constant_model():
    """Provide the reference constant-speed model (30 frames, 1s)."""
    from loomer.builders import constant_speed_model
    
    return constant_speed_model(
        screen_distance=20,
        frame_rate=30,
        speed=500,
        attacker_diameter=10,
        start_distance=500,
    )


@pytest.fixture
def ten_frame_model():
    """Provide a 10-frame constant-speed model at 10fps."""
    from loomer.builders import constant_speed_model
    
    return constant_speed_model(
        screen_distance=20,
        frame_rate=10,
        speed=100,
        attacker_diameter=50,
        start_distance=100,
    )


@pytest.fixture
def variable_model():
    """Provide a variable-speed model with an accelerating profile."""
    from loomer.builders import variable_speed_model
    
    return variable_speed_model(
        [100.0 + 10.0 * i for i in range(30)],
        screen_distance=20,
        frame_rate=30,
        attacker_diameter=10,
    )


@pytest.fixture
def diameter_model_small():
    """Provide a short diameter model (30 frames at 30fps)."""
    from loomer.builders import diameter_model
    
    return diameter_model(
        start_diameter=10,
        end_diameter=9.5,
        duration=1,
        frame_rate=30,
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty directory with no LOOMER_* environment variables.
    
    Handlers installed on the loomer logger are removed afterwards.
    """
    import os
    
    for name in list(os.environ):
        if name.startswith("LOOMER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    
    # main() installs a handler bound to the captured stderr
    import logging
    
    package_logger = logging.getLogger("loomer")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)

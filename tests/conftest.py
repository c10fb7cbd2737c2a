"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Only the interactive preview creates Taichi fields, but using session
    scope prevents multiple ti.init() calls which can cause segmentation
    faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def rng():
    """Seeded random generator for reproducible sampling."""
    return np.random.default_rng(42)


@pytest.fixture
def default_state():
    """SceneState of the default scene at time zero, camera at (0, 0, 5)."""
    from realtime_raytracer.scene.animation import initial_state
    from realtime_raytracer.scene.default_scene import create_default_scene, default_motions

    return initial_state(create_default_scene(), default_motions())

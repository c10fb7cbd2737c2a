"""CPU ray tracer for an animated scene of spheres.

This package renders one frame per call into an 8-bit RGB buffer, with
support for:
- Direct lighting from an orbiting point light, with shadow rays
- Metallic reflection and Fresnel-weighted refraction
- One-bounce global illumination
- Jittered anti-aliasing

Subpackages:
    core: Vector/color math, rays, light transport, frame renderer
    geometry: Sphere primitive and intersection
    materials: Procedural textures
    scene: Scene container, default scene, animation
    camera: Orbit camera and primary rays
    preview: PNG export, Matplotlib display, Taichi GGUI window
"""

__version__ = "0.1.0"

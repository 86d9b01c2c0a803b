"""Rendering subpackage.

Turns :class:`~location_tracking.models.Snapshot` values into pixels in two
steps:

* :mod:`location_tracking.renderer.scene` rebuilds the retained
  :class:`~location_tracking.stage.Stage` (grid, assignment lines, markers,
  labels) for each snapshot.
* :mod:`location_tracking.renderer.raster` composites the stage into a Pillow
  image, applying each node's opacity with NumPy.

The split lets the animation pass mutate marker opacity every frame without
rebuilding the scene.
"""

from location_tracking.renderer.raster import RasterRenderer
from location_tracking.renderer.scene import SceneRenderer

__all__ = ["RasterRenderer", "SceneRenderer"]

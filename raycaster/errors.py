class RaycasterError(Exception):
    pass


class SceneError(RaycasterError, ValueError):
    """Raised when a sphere or light is built with values no render pass can use."""

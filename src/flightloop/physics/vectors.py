"""Three-component vector used throughout the physics code.

World axes follow the rendering convention of the cockpit view:
+X is right, +Y is up and -Z is straight ahead at zero heading.

Typical usage example:
    from flightloop.physics.vectors import Vector3

    velocity = Vector3(0.0, 0.0, -50.0)
    speed = velocity.magnitude()
    heading = velocity.normalized()
"""

import math
from dataclasses import dataclass


@dataclass
class Vector3:
    """Mutable 3D vector with the arithmetic the flight model needs.

    Attributes:
        x: X component.
        y: Y component (world up).
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def zero() -> "Vector3":
        """Create a zero vector."""
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def up() -> "Vector3":
        """Create the world up unit vector (+Y)."""
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def forward() -> "Vector3":
        """Create the body-forward unit vector at zero attitude (-Z)."""
        return Vector3(0.0, 0.0, -1.0)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def copy(self) -> "Vector3":
        """Return an independent copy."""
        return Vector3(self.x, self.y, self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)

    def magnitude_squared(self) -> float:
        """Squared length (avoids the square root)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.magnitude_squared())

    def normalized(self) -> "Vector3":
        """Unit vector in the same direction.

        Returns:
            The normalized vector, or a zero vector when this vector has
            zero length (there is no direction to preserve).
        """
        mag = self.magnitude()
        if mag == 0.0:
            return Vector3.zero()
        return self / mag

    def dot(self, other: "Vector3") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Cross product (right-handed)."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def rotated_by_euler(self, pitch: float, yaw: float, roll: float) -> "Vector3":
        """Rotate by Euler angles using the intrinsic X-Y-Z order.

        Pitch turns about X, yaw about Y and roll about Z. The combined
        matrix is Rx(pitch) * Ry(yaw) * Rz(roll), so roll is applied to the
        vector first and pitch last.

        Args:
            pitch: Rotation about the X axis in radians.
            yaw: Rotation about the Y axis in radians.
            roll: Rotation about the Z axis in radians.

        Returns:
            The rotated vector.
        """
        cos_r, sin_r = math.cos(roll), math.sin(roll)
        x = self.x * cos_r - self.y * sin_r
        y = self.x * sin_r + self.y * cos_r
        z = self.z

        cos_y, sin_y = math.cos(yaw), math.sin(yaw)
        x, z = x * cos_y + z * sin_y, -x * sin_y + z * cos_y

        cos_p, sin_p = math.cos(pitch), math.sin(pitch)
        y, z = y * cos_p - z * sin_p, y * sin_p + z * cos_p

        return Vector3(x, y, z)

    def is_finite(self) -> bool:
        """Whether every component is a finite number."""
        return all(math.isfinite(c) for c in (self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

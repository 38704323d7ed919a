"""
primitives.py - Geometric primitives and ray intersection

Primitive kinds:
    - Sphere: center + radius, analytic intersection
    - Triangle: three ordered points, flat shaded
    - Rectangle: two triangles sharing a diagonal
    - Box: six rectangles around a center

Each primitive knows:
    - Its material
    - How to intersect a ray (returning a HitRecord)

Composite primitives (Rectangle, Box) own their parts exclusively and
report hits as their own, so the tracer only ever sees the four kinds.
"""

import numpy as np
from typing import Optional, Sequence, Tuple
from enum import Enum

from .config import PARALLEL_EPSILON
from .materials import Material
from .rays import Ray
from .vectors import Vector3, as_vector, cross, dot, length, normalize


class PrimitiveKind(Enum):
    """Enumeration of primitive shapes."""
    SPHERE = "sphere"
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"
    BOX = "box"


class HitRecord:
    """
    Result of testing a ray against geometry.

    Attributes
    ----------
    hit : bool
        True if the ray struck the primitive
    distance : float
        Distance along the ray's unit direction (inf on a miss)
    point : np.ndarray or None
        World-space hit point
    normal : np.ndarray or None
        Unit surface normal at the hit point
    primitive : Primitive or None
        Primitive that owns the hit
    index : int
        Position of the owning primitive in its scene (-1 until the
        scene query tags it)
    """

    __slots__ = ("hit", "distance", "point", "normal", "primitive", "index")

    def __init__(
        self,
        hit: bool,
        distance: float,
        point: Optional[Vector3] = None,
        normal: Optional[Vector3] = None,
        primitive: Optional['Primitive'] = None,
        index: int = -1
    ):
        self.hit = hit
        self.distance = distance
        self.point = point
        self.normal = normal
        self.primitive = primitive
        self.index = index

    @classmethod
    def miss(cls) -> 'HitRecord':
        return cls(hit=False, distance=np.inf)

    def __repr__(self) -> str:
        if not self.hit:
            return "HitRecord(miss)"
        return (
            f"HitRecord(distance={self.distance:.4f}, "
            f"point={np.round(self.point, 4)}, normal={np.round(self.normal, 4)}, "
            f"primitive={self.primitive!r})"
        )


class Primitive:
    """
    Base class for all scene primitives.

    Attributes
    ----------
    material : Material
        Appearance used when shading hits on this primitive
    name : str or None
        Optional label, used to address primitives in a scene
    """

    kind: PrimitiveKind

    def __init__(self, material: Material, name: Optional[str] = None):
        self.material = material
        self.name = name

    def intersect(self, ray: Ray) -> HitRecord:
        """
        Find where a ray first meets this primitive.

        Must be implemented by subclasses.

        Parameters
        ----------
        ray : Ray
            Ray with a unit direction

        Returns
        -------
        HitRecord
            Hit description, or HitRecord.miss()
        """
        raise NotImplementedError("Subclasses must implement intersect()")

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{self.__class__.__name__}{label}>"


class Sphere(Primitive):
    """
    Sphere given by center and radius.

    Intersection uses the projection of the center onto the ray:
        oc   = center - origin
        proj = oc · D
        d²   = |oc|² - proj²
        t    = proj - sqrt(r² - d²)

    A ray whose origin lies inside or beyond the sphere (proj < 0 or
    t <= 0) is reported as a miss, so rays leaving a sphere never hit
    its far wall.
    """

    kind = PrimitiveKind.SPHERE

    def __init__(
        self,
        center: Sequence[float] | np.ndarray,
        radius: float,
        material: Material,
        name: Optional[str] = None
    ):
        """
        Raises
        ------
        ValueError
            If radius is not positive
        """
        super().__init__(material, name)
        if not radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = as_vector(center)
        self.radius = float(radius)

    def intersect(self, ray: Ray) -> HitRecord:
        """
        Intersect by projecting the center onto the ray.

        With oc = center - origin and proj = oc · D, the squared distance
        from the center to the ray is d2 = |oc|^2 - proj^2. The near hit
        is at t = proj - sqrt(r^2 - d2).

        Parameters
        ----------
        ray : Ray
            Ray to test

        Returns
        -------
        HitRecord
            Near hit, or a miss if the sphere is behind the ray, off to
            the side, or contains the ray origin
        """
        oc = self.center - ray.origin
        proj = dot(oc, ray.direction)
        d2 = dot(oc, oc) - proj**2
        r2 = self.radius**2

        if proj < 0 or d2 > r2:
            return HitRecord.miss()

        distance = proj - np.sqrt(r2 - d2)
        if distance <= 0:
            return HitRecord.miss()

        point = ray.point_at(distance)
        normal = normalize(point - self.center)
        return HitRecord(True, distance, point, normal, self)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Sphere{label} center={np.round(self.center, 4)} r={self.radius:.4f}>"


class Triangle(Primitive):
    """
    Flat triangle with a face normal fixed by point order.

    normal = normalize((p1 - p0) x (p2 - p0))

    A point on the plane lies inside when, for every ordered edge (a, b),
    ((b - a) x (p - a)) · normal >= 0. Using the scalar triple product
    this equals (p - a) · (normal x (b - a)), so the three edge vectors
    normal x (b - a) are computed once at construction.
    """

    kind = PrimitiveKind.TRIANGLE

    def __init__(
        self,
        points: Sequence[Sequence[float] | np.ndarray],
        material: Material,
        name: Optional[str] = None
    ):
        """
        Raises
        ------
        ValueError
            If there are not exactly three points or they are collinear
        """
        super().__init__(material, name)
        if len(points) != 3:
            raise ValueError(f"Triangle needs exactly 3 points, got {len(points)}")
        self.points: Tuple[np.ndarray, ...] = tuple(as_vector(p) for p in points)

        p0, p1, p2 = self.points
        face = cross(p1 - p0, p2 - p0)
        scale = max(length(p1 - p0), length(p2 - p0), length(p2 - p1))
        if scale == 0 or length(face) <= 1e-12 * scale**2:
            raise ValueError("Triangle points are collinear or coincide")

        self.normal = normalize(face)
        self._edges = tuple(
            (a, cross(self.normal, b - a))
            for a, b in ((p0, p1), (p1, p2), (p2, p0))
        )

    def contains(self, point: Vector3) -> bool:
        """Check if a point on the triangle's plane lies inside its edges."""
        return all(dot(point - a, inward) >= 0 for a, inward in self._edges)

    def intersect(self, ray: Ray) -> HitRecord:
        """
        Intersect the ray with the triangle's plane, then test containment.

        Parameters
        ----------
        ray : Ray
            Ray to test

        Returns
        -------
        HitRecord
            Hit carrying the face normal, or a miss if the ray runs
            parallel to the plane, the plane is behind the ray, or the
            plane point falls outside the edges
        """
        denom = dot(self.normal, ray.direction)
        if abs(denom) < PARALLEL_EPSILON:
            return HitRecord.miss()

        distance = dot(self.normal, self.points[0] - ray.origin) / denom
        if distance <= 0:
            return HitRecord.miss()

        point = ray.point_at(distance)
        if not self.contains(point):
            return HitRecord.miss()

        return HitRecord(True, distance, point, self.normal, self)


class Rectangle(Primitive):
    """
    Planar quadrilateral made of two triangles.

    Points p0..p3 are given in order around the outline. The triangles
    (p0, p1, p2) and (p2, p3, p0) share the p0-p2 diagonal and the same
    winding, so both carry the same face normal. A self-crossing order
    gives the halves opposite normals and is rejected.
    """

    kind = PrimitiveKind.RECTANGLE

    def __init__(
        self,
        points: Sequence[Sequence[float] | np.ndarray],
        material: Material,
        name: Optional[str] = None
    ):
        """
        Raises
        ------
        ValueError
            If there are not exactly four points, they are not coplanar,
            they cross over themselves, or either half is degenerate
        """
        super().__init__(material, name)
        if len(points) != 4:
            raise ValueError(f"Rectangle needs exactly 4 points, got {len(points)}")
        self.points: Tuple[np.ndarray, ...] = tuple(as_vector(p) for p in points)

        p0, p1, p2, p3 = self.points
        self.triangles = (
            Triangle((p0, p1, p2), material),
            Triangle((p2, p3, p0), material),
        )

        scale = max(length(p2 - p0), length(p3 - p1))
        off_plane = abs(dot(self.triangles[0].normal, p3 - p0))
        if off_plane > 1e-7 * scale:
            raise ValueError(
                f"Rectangle points are not coplanar (off by {off_plane:.3g})"
            )
        if dot(self.triangles[0].normal, self.triangles[1].normal) <= 0:
            raise ValueError("Rectangle points cross over; list them in order around the outline")

    @property
    def normal(self) -> np.ndarray:
        """Face normal shared by both triangles."""
        return self.triangles[0].normal

    def intersect(self, ray: Ray) -> HitRecord:
        """
        Intersect both triangles and keep the nearer hit.

        The returned record names the rectangle, not the triangle.
        """
        closest = HitRecord.miss()
        for triangle in self.triangles:
            candidate = triangle.intersect(ray)
            if candidate.distance < closest.distance:
                closest = candidate
        if closest.hit:
            closest.primitive = self
        return closest


class Box(Primitive):
    """
    Axis-aligned box built from six rectangles.

    The corners sit at center ± half extents; every face is wound so its
    normal points out of the box.
    """

    kind = PrimitiveKind.BOX

    def __init__(
        self,
        center: Sequence[float] | np.ndarray,
        width: float,
        height: float,
        depth: float,
        material: Material,
        name: Optional[str] = None
    ):
        """
        Parameters
        ----------
        center : array-like
            Box center [x, y, z]
        width, height, depth : float
            Full extents along x, y and z
        material : Material
            Appearance shared by all faces

        Raises
        ------
        ValueError
            If any extent is not positive
        """
        super().__init__(material, name)
        for label, extent in (("width", width), ("height", height), ("depth", depth)):
            if not extent > 0:
                raise ValueError(f"Box {label} must be positive, got {extent}")
        self.center = as_vector(center)
        self.width = float(width)
        self.height = float(height)
        self.depth = float(depth)
        self.faces = self._build_faces()

    def _build_faces(self) -> Tuple[Rectangle, ...]:
        sx, sy, sz = self.width / 2, self.height / 2, self.depth / 2
        c = self.center

        # Top corners (+y) then bottom corners (-y)
        t1 = c + (-sx, +sy, -sz)
        t2 = c + (-sx, +sy, +sz)
        t3 = c + (+sx, +sy, +sz)
        t4 = c + (+sx, +sy, -sz)
        b1 = c + (-sx, -sy, -sz)
        b2 = c + (-sx, -sy, +sz)
        b3 = c + (+sx, -sy, +sz)
        b4 = c + (+sx, -sy, -sz)

        outlines = (
            (t1, t2, t3, t4),  # +y
            (b4, b3, b2, b1),  # -y
            (t1, t4, b4, b1),  # -z
            (t2, b2, b3, t3),  # +z
            (t2, t1, b1, b2),  # -x
            (t4, t3, b3, b4),  # +x
        )
        return tuple(Rectangle(outline, self.material) for outline in outlines)

    def intersect(self, ray: Ray) -> HitRecord:
        """
        Intersect all six faces and keep the nearest hit.

        Parameters
        ----------
        ray : Ray
            Ray to test

        Returns
        -------
        HitRecord
            Nearest face hit with the face's outward normal, attributed
            to the box; a miss if no face is hit
        """
        closest = HitRecord.miss()
        for face in self.faces:
            candidate = face.intersect(ray)
            if candidate.distance < closest.distance:
                closest = candidate
        if closest.hit:
            closest.primitive = self
        return closest

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return (
            f"<Box{label} center={np.round(self.center, 4)} "
            f"size=({self.width:.4f}, {self.height:.4f}, {self.depth:.4f})>"
        )


# =============================================================================
# Factory Functions
# =============================================================================

def create_wall(
    corner: Sequence[float] | np.ndarray,
    edge_u: Sequence[float] | np.ndarray,
    edge_v: Sequence[float] | np.ndarray,
    material: Material,
    name: Optional[str] = None
) -> Rectangle:
    """
    Create a parallelogram from one corner and two edge vectors.

    The face normal is edge_u x edge_v.

    Parameters
    ----------
    corner : array-like
        First corner
    edge_u : array-like
        Vector from the first to the second corner
    edge_v : array-like
        Vector from the second to the third corner
    material : Material
        Surface appearance
    name : str, optional
        Label for the wall

    Returns
    -------
    Rectangle
        Wall with outline corner, corner+u, corner+u+v, corner+v
    """
    q = as_vector(corner)
    u = as_vector(edge_u)
    v = as_vector(edge_v)
    return Rectangle((q, q + u, q + u + v, q + v), material, name)


def create_cube(
    center: Sequence[float] | np.ndarray,
    size: float,
    material: Material,
    name: Optional[str] = None
) -> Box:
    """Create a box with equal extents on every axis."""
    return Box(center, size, size, size, material, name)

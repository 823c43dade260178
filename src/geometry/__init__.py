"""
Scene geometry: the Hittable interface, its shapes and decorators,
the flat HittableList, the BVH and the Scene container.

Modules:
    hittable: HitRecord and the Hittable base class
    sphere: Sphere and MovingSphere
    aarect: XYRect, XZRect and YZRect
    box: Box built from six rectangles
    transform: Translate and RotateY decorators
    constant_medium: ConstantMedium (volumetric fog/smoke)
    world: HittableList, build_bvh and Scene
    bvh: BVHNode
"""

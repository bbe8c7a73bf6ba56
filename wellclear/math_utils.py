import math
from typing import Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

def dot(a: Vec2, b: Vec2) -> float:
    return a[0]*b[0] + a[1]*b[1]

def norm(a: Vec2) -> float:
    return math.hypot(a[0], a[1])

def norm3(a: Vec3) -> float:
    return math.sqrt(a[0]*a[0] + a[1]*a[1] + a[2]*a[2])

def add3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])

def sub3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])

def mul3(a: Vec3, k: float) -> Vec3:
    return (a[0]*k, a[1]*k, a[2]*k)

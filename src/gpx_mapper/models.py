from dataclasses import dataclass, field

# ((min_lon, min_lat), (max_lon, max_lat))
Bounds = tuple[tuple[float, float], tuple[float, float]]


@dataclass
class TrackPoint:
    lat: float
    lon: float
    elevation: float | None = None  # meters


@dataclass
class ParsedTrack:
    name: str
    filename: str
    points: list[TrackPoint] = field(default_factory=list)


@dataclass
class RouteMetrics:
    distance_km: float
    elevation_gain_m: float | None  # None when no elevation data
    bounds: Bounds | None  # None for an empty route


@dataclass
class Route:
    name: str
    filename: str
    distance: float  # km, one decimal
    elevation_gain: int | None  # meters, None when no elevation data
    bounds: Bounds
    coordinates: list[list[float]]  # [lon, lat] in track order
    id: str = ""
    color: str = ""

    def to_dict(self) -> dict:
        """Serialize as one entry of the route document."""
        (min_lon, min_lat), (max_lon, max_lat) = self.bounds
        return {
            "id": self.id,
            "name": self.name,
            "filename": self.filename,
            "distance": self.distance,
            "elevationGain": self.elevation_gain,
            "bounds": [[min_lon, min_lat], [max_lon, max_lat]],
            "coordinates": self.coordinates,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Route":
        (min_lon, min_lat), (max_lon, max_lat) = data["bounds"]
        return cls(
            name=data["name"],
            filename=data["filename"],
            distance=data["distance"],
            elevation_gain=data.get("elevationGain"),
            bounds=((min_lon, min_lat), (max_lon, max_lat)),
            coordinates=[list(c) for c in data["coordinates"]],
            id=data["id"],
            color=data["color"],
        )

"""
Strava data models.

Typed records for the main Strava resources. Only the commonly used fields
are modelled; the raw dictionaries returned by the resource functions keep
everything Strava sends. Build instances with the functions in parsers.py.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class LatLng:
    """A point as [latitude, longitude]."""

    lat: float
    lng: float


@dataclass
class MetaAthlete:
    id: int


@dataclass
class SummaryAthlete:
    """
    Represents an athlete as returned by /athlete and list endpoints.

    Attributes:
        id: Athlete id
        firstname: First name
        lastname: Last name
        city: City, if shared
        country: Country, if shared
        sex: "M", "F" or None
        premium: Whether the athlete has a subscription
        weight: Weight in kilograms (authenticated athlete only)
        profile: URL of the large profile picture
        created_at: Account creation time
    """

    id: int
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    sex: Optional[str] = None
    premium: bool = False
    weight: Optional[float] = None
    profile: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class SummaryActivity:
    """
    Represents an activity.

    Attributes:
        id: Activity id
        name: Activity name
        sport_type: Sport type (Run, Ride, TrailRun, ...)
        distance: Distance in meters
        moving_time: Moving time in seconds
        elapsed_time: Elapsed time in seconds
        total_elevation_gain: Elevation gain in meters
        start_date: Start time (UTC)
        start_date_local: Start time in the activity's timezone (naive)
        timezone: Timezone description
        start_latlng: Start point, if recorded
        end_latlng: End point, if recorded
        average_speed: Meters per second
        max_speed: Meters per second
        average_heartrate: Beats per minute, if recorded
        average_watts: Watts, if recorded
        kudos_count: Number of kudos
        trainer: Recorded on a trainer
        commute: Marked as a commute
        manual: Created manually
        private: Visible only to the owner
        gear_id: Gear used, if set
        athlete: Owner
        external_id: Identifier from the upload
        upload_id: Upload that created the activity
    """

    id: int
    name: str = ""
    sport_type: Optional[str] = None
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    total_elevation_gain: float = 0.0
    start_date: Optional[datetime] = None
    start_date_local: Optional[datetime] = None
    timezone: str = ""
    start_latlng: Optional[LatLng] = None
    end_latlng: Optional[LatLng] = None
    average_speed: float = 0.0
    max_speed: float = 0.0
    average_heartrate: Optional[float] = None
    average_watts: Optional[float] = None
    kudos_count: int = 0
    trainer: bool = False
    commute: bool = False
    manual: bool = False
    private: bool = False
    gear_id: Optional[str] = None
    athlete: Optional[MetaAthlete] = None
    external_id: Optional[str] = None
    upload_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with datetimes as ISO strings
        """
        data = asdict(self)
        for key in ("start_date", "start_date_local"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        return data


@dataclass
class Lap:
    id: int
    name: str = ""
    lap_index: int = 0
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    start_date: Optional[datetime] = None
    average_speed: float = 0.0
    max_speed: float = 0.0
    total_elevation_gain: float = 0.0


@dataclass
class ActivityTotal:
    """Roll-up of activities over a period (recent, year-to-date, all-time)."""

    count: int = 0
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    elevation_gain: float = 0.0
    achievement_count: Optional[int] = None


@dataclass
class ActivityStats:
    """
    Represents /athletes/{id}/stats.

    Attributes:
        biggest_ride_distance: Longest ride in meters
        biggest_climb_elevation_gain: Biggest climb in meters
        recent_ride_totals: Last four weeks of rides
        recent_run_totals: Last four weeks of runs
        recent_swim_totals: Last four weeks of swims
        ytd_ride_totals: Year-to-date rides
        ytd_run_totals: Year-to-date runs
        ytd_swim_totals: Year-to-date swims
        all_ride_totals: All-time rides
        all_run_totals: All-time runs
        all_swim_totals: All-time swims
    """

    biggest_ride_distance: Optional[float] = None
    biggest_climb_elevation_gain: Optional[float] = None
    recent_ride_totals: ActivityTotal = field(default_factory=ActivityTotal)
    recent_run_totals: ActivityTotal = field(default_factory=ActivityTotal)
    recent_swim_totals: ActivityTotal = field(default_factory=ActivityTotal)
    ytd_ride_totals: ActivityTotal = field(default_factory=ActivityTotal)
    ytd_run_totals: ActivityTotal = field(default_factory=ActivityTotal)
    ytd_swim_totals: ActivityTotal = field(default_factory=ActivityTotal)
    all_ride_totals: ActivityTotal = field(default_factory=ActivityTotal)
    all_run_totals: ActivityTotal = field(default_factory=ActivityTotal)
    all_swim_totals: ActivityTotal = field(default_factory=ActivityTotal)


@dataclass
class SummaryClub:
    id: int
    name: str = ""
    sport_type: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    member_count: int = 0
    private: bool = False
    url: Optional[str] = None


@dataclass
class SummaryGear:
    """
    Represents a bike or a pair of shoes.

    Attributes:
        id: Gear id, e.g. "b12345678" for bikes, "g12345678" for shoes
        name: Gear name
        primary: Whether this is the athlete's default gear
        distance: Distance logged with this gear, in meters
        brand_name: Brand, detailed gear only
        model_name: Model, detailed gear only
    """

    id: str
    name: str = ""
    primary: bool = False
    distance: float = 0.0
    brand_name: Optional[str] = None
    model_name: Optional[str] = None


@dataclass
class SummarySegment:
    id: int
    name: str = ""
    activity_type: Optional[str] = None
    distance: float = 0.0
    average_grade: float = 0.0
    maximum_grade: float = 0.0
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None
    climb_category: int = 0
    city: Optional[str] = None
    country: Optional[str] = None
    starred: bool = False
    start_latlng: Optional[LatLng] = None
    end_latlng: Optional[LatLng] = None


@dataclass
class SegmentEffort:
    id: int
    name: str = ""
    elapsed_time: int = 0
    moving_time: int = 0
    distance: float = 0.0
    start_date: Optional[datetime] = None
    start_date_local: Optional[datetime] = None
    activity_id: Optional[int] = None
    segment: Optional[SummarySegment] = None
    pr_rank: Optional[int] = None
    kom_rank: Optional[int] = None


@dataclass
class Route:
    id: int
    name: str = ""
    description: Optional[str] = None
    distance: float = 0.0
    elevation_gain: float = 0.0
    type: Optional[int] = None
    sub_type: Optional[int] = None
    private: bool = False
    starred: bool = False
    estimated_moving_time: Optional[int] = None
    athlete: Optional[SummaryAthlete] = None
    created_at: Optional[datetime] = None


@dataclass
class Comment:
    id: int
    activity_id: Optional[int] = None
    text: str = ""
    athlete: Optional[SummaryAthlete] = None
    created_at: Optional[datetime] = None


@dataclass
class Upload:
    """
    Represents the processing status of an uploaded file.

    Attributes:
        id: Upload id
        id_str: Upload id as string
        external_id: External identifier given at upload time
        error: Processing error, if any
        status: Human-readable processing status
        activity_id: Activity created from the upload, once processed
    """

    id: int
    id_str: Optional[str] = None
    external_id: Optional[str] = None
    error: Optional[str] = None
    status: Optional[str] = None
    activity_id: Optional[int] = None

    @property
    def is_processed(self) -> bool:
        return self.activity_id is not None

    @property
    def has_error(self) -> bool:
        return bool(self.error)


@dataclass
class Stream:
    """
    One data stream of an activity, segment or route.

    Attributes:
        type: Stream type (time, distance, latlng, altitude, heartrate, ...)
        data: Samples
        series_type: Base series (distance or time)
        original_size: Number of samples before resolution reduction
        resolution: low, medium or high
    """

    type: str
    data: List[Any] = field(default_factory=list)
    series_type: Optional[str] = None
    original_size: Optional[int] = None
    resolution: Optional[str] = None

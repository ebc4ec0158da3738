"""
Strava API endpoint definitions.

Paths are relative to BASE_URL. Documentation:
https://developers.strava.com/docs/reference/
"""

BASE_URL = "https://www.strava.com/api/v3"

# Activities
ATHLETE_ACTIVITIES = "/athlete/activities"
ACTIVITIES = "/activities"
ACTIVITY = "/activities/{activity_id}"
ACTIVITY_LAPS = "/activities/{activity_id}/laps"
ACTIVITY_ZONES = "/activities/{activity_id}/zones"
ACTIVITY_COMMENTS = "/activities/{activity_id}/comments"
ACTIVITY_KUDOS = "/activities/{activity_id}/kudos"

# Athletes
ATHLETE = "/athlete"
ATHLETE_STATS = "/athletes/{athlete_id}/stats"
ATHLETE_ZONES = "/athlete/zones"

# Clubs
ATHLETE_CLUBS = "/athlete/clubs"
CLUB = "/clubs/{club_id}"
CLUB_MEMBERS = "/clubs/{club_id}/members"
CLUB_ACTIVITIES = "/clubs/{club_id}/activities"
CLUB_ADMINS = "/clubs/{club_id}/admins"

# Gear
GEAR = "/gear/{gear_id}"

# Routes
ROUTE = "/routes/{route_id}"
ATHLETE_ROUTES = "/athletes/{athlete_id}/routes"
ROUTE_EXPORT_GPX = "/routes/{route_id}/export_gpx"
ROUTE_EXPORT_TCX = "/routes/{route_id}/export_tcx"

# Segments
SEGMENT = "/segments/{segment_id}"
SEGMENTS_STARRED = "/segments/starred"
SEGMENTS_EXPLORE = "/segments/explore"
SEGMENT_STARRED = "/segments/{segment_id}/starred"

# Segment efforts
SEGMENT_EFFORTS = "/segment_efforts"
SEGMENT_EFFORT = "/segment_efforts/{segment_effort_id}"

# Streams
ACTIVITY_STREAMS = "/activities/{activity_id}/streams"
SEGMENT_STREAMS = "/segments/{segment_id}/streams"
ROUTE_STREAMS = "/routes/{route_id}/streams"
SEGMENT_EFFORT_STREAMS = "/segment_efforts/{segment_effort_id}/streams"

# Uploads
UPLOADS = "/uploads"
UPLOAD = "/uploads/{upload_id}"

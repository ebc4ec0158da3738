"""Tests for the per-resource API functions."""

from datetime import datetime
from unittest import mock

import pytest

from strava_api.api import (
    activities,
    athletes,
    clubs,
    gears,
    routes,
    segment_efforts,
    segments,
    streams,
)
from strava_api.api.models import SummaryActivity
from strava_api.exceptions import InvalidArgumentError, MalformedResponseError

API = "https://www.strava.com/api/v3"


def mock_response(payload=None, text=None):
    response = mock.Mock()
    response.status_code = 200
    response.headers = {}
    if payload is not None:
        response.json.return_value = payload
        response.text = repr(payload)
    else:
        response.json.side_effect = ValueError("Expecting value")
        response.text = text
    return response


@pytest.fixture
def mock_request():
    with mock.patch("strava_api.api.http.requests.request") as patched:
        yield patched


def sent(mock_request):
    """Method, URL and keyword arguments of the single request made."""
    assert mock_request.call_count == 1
    args, kwargs = mock_request.call_args
    return args[0], args[1], kwargs


class TestActivities:
    """Tests for activity endpoints."""

    def test_get_athlete_activities_defaults(self, mock_request):
        """Without time bounds only paging is sent."""
        mock_request.return_value = mock_response([])

        assert activities.get_athlete_activities("token") == []

        method, url, kwargs = sent(mock_request)
        assert method == "GET"
        assert url == f"{API}/athlete/activities"
        assert kwargs["params"] == {"page": 1, "per_page": 30}
        assert kwargs["headers"]["Authorization"] == "Bearer token"

    def test_get_athlete_activities_time_bounds(self, mock_request):
        """Positive before/after bounds are sent."""
        mock_request.return_value = mock_response([{"id": 1}])

        activities.get_athlete_activities(
            "token", before=1700000000, after=1600000000, page=2, per_page=50
        )

        _, _, kwargs = sent(mock_request)
        assert kwargs["params"] == {
            "before": 1700000000,
            "after": 1600000000,
            "page": 2,
            "per_page": 50,
        }

    @pytest.mark.parametrize(
        "page, per_page, parameter", [(0, 30, "page"), (1, 0, "per_page"), (-1, 30, "page")]
    )
    def test_invalid_paging(self, mock_request, page, per_page, parameter):
        """Paging below 1 is rejected before any request."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            activities.get_athlete_activities("token", page=page, per_page=per_page)

        assert exc_info.value.parameter == parameter
        mock_request.assert_not_called()

    def test_get_activity(self, mock_request):
        """get_activity() reads one activity."""
        mock_request.return_value = mock_response({"id": 42, "name": "Morning Run"})

        assert activities.get_activity("token", 42)["name"] == "Morning Run"

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/activities/42"
        assert kwargs["params"] is None

    def test_get_activity_with_efforts(self, mock_request):
        """include_all_efforts is sent as a query flag."""
        mock_request.return_value = mock_response({"id": 42})

        activities.get_activity("token", "42", include_all_efforts=True)

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/activities/42"
        assert kwargs["params"] == {"include_all_efforts": "true"}

    @pytest.mark.parametrize("activity_id", [0, -5, None, "abc", True])
    def test_invalid_activity_id(self, mock_request, activity_id):
        """Ids must be positive integers."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            activities.get_activity("token", activity_id)

        assert exc_info.value.parameter == "activity_id"
        mock_request.assert_not_called()

    def test_blank_token(self, mock_request):
        """A blank token is rejected."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            activities.get_activity("  ", 42)

        assert exc_info.value.parameter == "access_token"
        mock_request.assert_not_called()

    @pytest.mark.parametrize(
        "func, path",
        [
            (activities.get_activity_laps, "laps"),
            (activities.get_activity_zones, "zones"),
        ],
    )
    def test_activity_sub_resources(self, mock_request, func, path):
        """Laps and zones are read from the activity's sub-resources."""
        mock_request.return_value = mock_response([])

        func("token", 7)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/activities/7/{path}"

    @pytest.mark.parametrize(
        "func, path",
        [
            (activities.get_activity_comments, "comments"),
            (activities.get_activity_kudoers, "kudos"),
        ],
    )
    def test_activity_paged_sub_resources(self, mock_request, func, path):
        """Comments and kudoers are paged."""
        mock_request.return_value = mock_response([])

        func("token", 7, page=3, per_page=10)

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/activities/7/{path}"
        assert kwargs["params"] == {"page": 3, "per_page": 10}

    def test_create_activity(self, mock_request):
        """A manual activity is created with a form POST."""
        mock_request.return_value = mock_response({"id": 99})

        activities.create_activity(
            "token",
            name="Lunch Ride",
            sport_type="Ride",
            start_date_local=datetime(2024, 5, 1, 12, 0, 0),
            elapsed_time=3600,
            distance=25000.0,
            commute=True,
        )

        method, url, kwargs = sent(mock_request)
        assert method == "POST"
        assert url == f"{API}/activities"
        assert kwargs["data"] == {
            "name": "Lunch Ride",
            "sport_type": "Ride",
            "start_date_local": "2024-05-01T12:00:00",
            "elapsed_time": 3600,
            "distance": 25000.0,
            "commute": 1,
        }

    @pytest.mark.parametrize(
        "kwargs, parameter",
        [
            ({"name": " "}, "name"),
            ({"sport_type": ""}, "sport_type"),
            ({"elapsed_time": 0}, "elapsed_time"),
            ({"start_date_local": None}, "start_date_local"),
        ],
    )
    def test_create_activity_validation(self, mock_request, kwargs, parameter):
        """Required fields are validated."""
        params = {
            "name": "Run",
            "sport_type": "Run",
            "start_date_local": datetime(2024, 5, 1),
            "elapsed_time": 60,
            **kwargs,
        }

        with pytest.raises(InvalidArgumentError) as exc_info:
            activities.create_activity("token", **params)

        assert exc_info.value.parameter == parameter
        mock_request.assert_not_called()

    def test_update_activity_sends_only_given_fields(self, mock_request):
        """Only supplied fields are sent, booleans as true/false."""
        mock_request.return_value = mock_response({"id": 42})

        activities.update_activity(
            "token", 42, name="Renamed", trainer=False, gear_id="b123", description="  "
        )

        method, url, kwargs = sent(mock_request)
        assert method == "PUT"
        assert url == f"{API}/activities/42"
        assert kwargs["data"] == {"name": "Renamed", "trainer": "false", "gear_id": "b123"}

    def test_list_athlete_activities_typed(self, mock_request):
        """The typed variant returns SummaryActivity records."""
        mock_request.return_value = mock_response(
            [{"id": 1, "name": "Run", "sport_type": "Run", "distance": 5000.0}]
        )

        result = activities.list_athlete_activities("token")

        assert len(result) == 1
        assert isinstance(result[0], SummaryActivity)
        assert result[0].distance == 5000.0


class TestAthletes:
    """Tests for athlete endpoints."""

    def test_get_authenticated_athlete(self, mock_request):
        mock_request.return_value = mock_response({"id": 1, "firstname": "Ada"})

        assert athletes.get_authenticated_athlete("token")["firstname"] == "Ada"

        _, url, _ = sent(mock_request)
        assert url == f"{API}/athlete"

    def test_get_athlete_stats(self, mock_request):
        mock_request.return_value = mock_response({"biggest_ride_distance": 100.0})

        athletes.get_athlete_stats("token", 1234)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/athletes/1234/stats"

    def test_get_athlete_zones(self, mock_request):
        mock_request.return_value = mock_response({"heart_rate": {}})

        athletes.get_athlete_zones("token")

        _, url, _ = sent(mock_request)
        assert url == f"{API}/athlete/zones"

    def test_update_athlete(self, mock_request):
        """Weight is sent as JSON with PUT."""
        mock_request.return_value = mock_response({"id": 1, "weight": 70.5})

        athletes.update_athlete("token", 70.5)

        method, url, kwargs = sent(mock_request)
        assert method == "PUT"
        assert url == f"{API}/athlete"
        assert kwargs["json"] == {"weight": 70.5}

    @pytest.mark.parametrize("weight", [0, -1, "70", None, True])
    def test_update_athlete_invalid_weight(self, mock_request, weight):
        with pytest.raises(InvalidArgumentError) as exc_info:
            athletes.update_athlete("token", weight)

        assert exc_info.value.parameter == "weight"
        mock_request.assert_not_called()


class TestClubs:
    """Tests for club endpoints."""

    def test_get_club(self, mock_request):
        mock_request.return_value = mock_response({"id": 5, "name": "Club"})

        clubs.get_club("token", 5)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/clubs/5"

    def test_get_athlete_clubs(self, mock_request):
        mock_request.return_value = mock_response([])

        clubs.get_athlete_clubs("token")

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/athlete/clubs"
        assert kwargs["params"] == {"page": 1, "per_page": 30}

    @pytest.mark.parametrize(
        "func, path",
        [
            (clubs.get_club_members, "members"),
            (clubs.get_club_activities, "activities"),
            (clubs.get_club_admins, "admins"),
        ],
    )
    def test_club_listings(self, mock_request, func, path):
        mock_request.return_value = mock_response([])

        func("token", 5, page=2)

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/clubs/5/{path}"
        assert kwargs["params"] == {"page": 2, "per_page": 30}

    def test_invalid_club_id(self, mock_request):
        with pytest.raises(InvalidArgumentError) as exc_info:
            clubs.get_club_members("token", 0)

        assert exc_info.value.parameter == "club_id"


class TestGears:
    """Tests for the gear endpoint."""

    def test_get_gear(self, mock_request):
        mock_request.return_value = mock_response({"id": "b12345", "name": "Road bike"})

        gears.get_gear("token", "b12345")

        _, url, _ = sent(mock_request)
        assert url == f"{API}/gear/b12345"

    @pytest.mark.parametrize("gear_id", [None, "", "   "])
    def test_blank_gear_id(self, mock_request, gear_id):
        with pytest.raises(InvalidArgumentError) as exc_info:
            gears.get_gear("token", gear_id)

        assert exc_info.value.parameter == "gear_id"
        mock_request.assert_not_called()


class TestRoutes:
    """Tests for route endpoints."""

    def test_get_route(self, mock_request):
        mock_request.return_value = mock_response({"id": 11})

        routes.get_route("token", 11)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/routes/11"

    def test_get_athlete_routes(self, mock_request):
        mock_request.return_value = mock_response([])

        routes.get_athlete_routes("token", 1234, per_page=5)

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/athletes/1234/routes"
        assert kwargs["params"] == {"page": 1, "per_page": 5}

    @pytest.mark.parametrize(
        "func, path, document",
        [
            (routes.export_route_gpx, "export_gpx", "<gpx></gpx>"),
            (routes.export_route_tcx, "export_tcx", "<TrainingCenterDatabase/>"),
        ],
    )
    def test_exports_return_raw_text(self, mock_request, func, path, document):
        """Exports return the document text unparsed."""
        mock_request.return_value = mock_response(text=document)

        assert func("token", 11) == document

        _, url, _ = sent(mock_request)
        assert url == f"{API}/routes/11/{path}"


class TestSegments:
    """Tests for segment endpoints."""

    def test_get_segment(self, mock_request):
        mock_request.return_value = mock_response({"id": 229781})

        segments.get_segment("token", 229781)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/segments/229781"

    def test_get_starred_segments(self, mock_request):
        mock_request.return_value = mock_response([])

        segments.get_starred_segments("token")

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/segments/starred"
        assert kwargs["params"] == {"page": 1, "per_page": 30}

    def test_explore_segments(self, mock_request):
        """Explore unwraps the segments array."""
        mock_request.return_value = mock_response({"segments": [{"id": 1}, {"id": 2}]})

        result = segments.explore_segments(
            "token", [37.82, -122.5, 37.85, -122.4], activity_type="riding", max_cat=3
        )

        assert result == [{"id": 1}, {"id": 2}]
        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/segments/explore"
        assert kwargs["params"] == {
            "bounds": "37.82,-122.5,37.85,-122.4",
            "activity_type": "riding",
            "max_cat": 3,
        }

    def test_explore_segments_missing_array(self, mock_request):
        mock_request.return_value = mock_response({"message": "nope"})

        with pytest.raises(MalformedResponseError, match="segments"):
            segments.explore_segments("token", [1, 2, 3, 4])

    @pytest.mark.parametrize(
        "kwargs, parameter",
        [
            ({"bounds": [1, 2, 3]}, "bounds"),
            ({"bounds": "1,2,3,4"}, "bounds"),
            ({"bounds": [1, 2, 3, 4], "activity_type": "swimming"}, "activity_type"),
            ({"bounds": [1, 2, 3, 4], "min_cat": -1}, "min_cat"),
            ({"bounds": [1, 2, 3, 4], "max_cat": 6}, "max_cat"),
        ],
    )
    def test_explore_segments_validation(self, mock_request, kwargs, parameter):
        with pytest.raises(InvalidArgumentError) as exc_info:
            segments.explore_segments("token", **kwargs)

        assert exc_info.value.parameter == parameter
        mock_request.assert_not_called()

    def test_star_segment(self, mock_request):
        mock_request.return_value = mock_response({"id": 229781, "starred": True})

        segments.star_segment("token", 229781, True)

        method, url, kwargs = sent(mock_request)
        assert method == "PUT"
        assert url == f"{API}/segments/229781/starred"
        assert kwargs["json"] == {"starred": True}


class TestSegmentEfforts:
    """Tests for segment effort endpoints."""

    def test_get_segment_efforts(self, mock_request):
        mock_request.return_value = mock_response([])

        segment_efforts.get_segment_efforts(
            "token",
            229781,
            start_date_local=datetime(2024, 1, 1),
            end_date_local=datetime(2024, 12, 31, 23, 59, 59),
            per_page=100,
        )

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/segment_efforts"
        assert kwargs["params"] == {
            "segment_id": 229781,
            "per_page": 100,
            "start_date_local": "2024-01-01T00:00:00",
            "end_date_local": "2024-12-31T23:59:59",
        }

    def test_get_segment_efforts_invalid_per_page(self, mock_request):
        with pytest.raises(InvalidArgumentError) as exc_info:
            segment_efforts.get_segment_efforts("token", 229781, per_page=0)

        assert exc_info.value.parameter == "per_page"

    def test_get_segment_effort(self, mock_request):
        mock_request.return_value = mock_response({"id": 8})

        segment_efforts.get_segment_effort("token", 8)

        _, url, _ = sent(mock_request)
        assert url == f"{API}/segment_efforts/8"


class TestStreams:
    """Tests for stream endpoints."""

    @pytest.mark.parametrize(
        "func, path",
        [
            (streams.get_activity_streams, "activities/3/streams"),
            (streams.get_segment_streams, "segments/3/streams"),
            (streams.get_route_streams, "routes/3/streams"),
            (streams.get_segment_effort_streams, "segment_efforts/3/streams"),
        ],
    )
    def test_stream_paths(self, mock_request, func, path):
        mock_request.return_value = mock_response([{"type": "time", "data": [0, 1]}])

        func("token", 3)

        _, url, kwargs = sent(mock_request)
        assert url == f"{API}/{path}"
        assert kwargs["params"] is None

    def test_keys_and_key_by_type(self, mock_request):
        """Key lists are comma-joined and key_by_type sent as true."""
        mock_request.return_value = mock_response({"time": {"data": [0, 1]}})

        streams.get_activity_streams("token", 3, keys=["time", "heartrate"], key_by_type=True)

        _, _, kwargs = sent(mock_request)
        assert kwargs["params"] == {"keys": "time,heartrate", "key_by_type": "true"}

    def test_fetch_activity_streams_typed(self, mock_request):
        mock_request.return_value = mock_response(
            {
                "time": {"data": [0, 1, 2], "series_type": "distance", "original_size": 3, "resolution": "high"},
                "heartrate": {"data": [120, 125, 130], "series_type": "distance", "original_size": 3, "resolution": "high"},
            }
        )

        result = streams.fetch_activity_streams("token", 3, keys="time,heartrate")

        assert set(result) == {"time", "heartrate"}
        assert result["heartrate"].data == [120, 125, 130]
        _, _, kwargs = sent(mock_request)
        assert kwargs["params"] == {"keys": "time,heartrate", "key_by_type": "true"}

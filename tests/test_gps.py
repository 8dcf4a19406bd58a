import numpy as np
import pytest

from deadreckon.gps import EARTH_MAJOR, EARTH_MINOR, GpsTools, NavSatFix


@pytest.fixture
def tools():
    return GpsTools()


def test_gps_msg_to_lla_orders_components():
    fix = NavSatFix(latitude=37.5, longitude=127.0, altitude=40.0, status=4)
    np.testing.assert_array_equal(GpsTools.gps_msg_to_lla(fix), np.array([37.5, 127.0, 40.0]))


def test_equator_prime_meridian_is_major_axis(tools):
    np.testing.assert_allclose(tools.lla_to_ecef([0.0, 0.0, 0.0]), [EARTH_MAJOR, 0.0, 0.0], atol=1e-6)


def test_pole_is_minor_axis(tools):
    ecef = tools.lla_to_ecef([90.0, 0.0, 0.0])
    assert ecef[2] == pytest.approx(EARTH_MINOR, abs=1e-3)
    assert abs(ecef[0]) < 1e-2


@pytest.mark.parametrize(
    "lla",
    [(37.5, 127.0, 40.0), (-33.9, 18.4, 10.0), (51.5, -0.1, 120.0), (0.0, 0.0, 0.0)],
)
def test_lla_ecef_round_trip(tools, lla):
    back = tools.ecef_to_lla(tools.lla_to_ecef(lla))
    np.testing.assert_allclose(back[:2], lla[:2], atol=1e-7)
    assert back[2] == pytest.approx(lla[2], abs=1e-2)


def test_origin_maps_to_zero_enu(tools):
    tools.lla_origin = np.array([37.5, 127.0, 40.0])
    enu = tools.ecef_to_enu(tools.lla_to_ecef(tools.lla_origin))
    np.testing.assert_allclose(enu, np.zeros(3), atol=1e-6)


def test_enu_ecef_round_trip(tools):
    tools.lla_origin = np.array([37.5, 127.0, 40.0])
    enu = np.array([12.0, -7.5, 3.0])
    np.testing.assert_allclose(tools.ecef_to_enu(tools.enu_to_ecef(enu)), enu, atol=1e-6)


def test_altitude_increase_points_up(tools):
    tools.lla_origin = np.array([37.5, 127.0, 40.0])
    enu = tools.ecef_to_enu(tools.lla_to_ecef([37.5, 127.0, 50.0]))
    np.testing.assert_allclose(enu, [0.0, 0.0, 10.0], atol=1e-5)


def test_northward_fix_has_positive_north(tools):
    tools.lla_origin = np.array([37.5, 127.0, 40.0])
    enu = tools.ecef_to_enu(tools.lla_to_ecef([37.501, 127.0, 40.0]))
    assert enu[1] > 100.0
    assert abs(enu[0]) < 1e-3


def test_first_valid_fix_sets_origin(tools):
    assert not tools.has_origin
    result = tools.update_gps_pose(NavSatFix(37.5, 127.0, 40.0, status=4))
    assert result is None
    assert tools.has_origin
    np.testing.assert_array_equal(tools.lla_origin, [37.5, 127.0, 40.0])


def test_invalid_status_is_ignored(tools):
    for status in (0, 3, 6, -1):
        assert tools.update_gps_pose(NavSatFix(37.5, 127.0, 40.0, status=status)) is None
    assert not tools.has_origin


def test_second_fix_updates_position(tools):
    tools.update_gps_pose(NavSatFix(37.5, 127.0, 40.0, status=1))
    enu = tools.update_gps_pose(NavSatFix(37.5, 127.0, 45.0, status=2))
    np.testing.assert_allclose(enu, [0.0, 0.0, 5.0], atol=1e-5)
    np.testing.assert_allclose(tools.gps_pos, enu)


def test_initial_position_is_zero(tools):
    np.testing.assert_array_equal(tools.gps_pos, np.zeros(3))
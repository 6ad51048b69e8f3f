import pytest

from path_display.geometry import IDENTITY_POSE, Pose
from path_display.indicator_pool import IndicatorPool
from path_display.style import StyleState


@pytest.fixture
def pool(scene):
    root = scene.create_visual()
    scene.root_visual.add_child(root)
    return IndicatorPool(scene, root, scene.create_material())


def test_starts_empty(pool):
    assert len(pool) == 0


def test_ensure_size_creates_hidden_slots(pool):
    pool.ensure_size(3)
    assert len(pool) == 3
    for slot in pool:
        assert not slot.arrow.visible
        assert not slot.axis.visible
        assert slot.arrow.local_pose == IDENTITY_POSE


def test_ensure_size_never_shrinks_or_recreates(pool):
    pool.ensure_size(4)
    first = [slot.arrow for slot in pool]
    pool.ensure_size(2)
    pool.ensure_size(4)
    assert len(pool) == 4
    assert [slot.arrow for slot in pool] == first


def test_new_slots_share_material(pool):
    pool.ensure_size(2)
    assert pool.slot(0).arrow.material is pool.slot(1).arrow.material


def test_new_slots_take_given_style(pool):
    style = StyleState()
    style.set_arrow_dimensions(0.5, 0.02, 0.1, 0.04)
    style.set_axis_dimensions(0.6, 0.05)
    pool.ensure_size(1, style)
    slot = pool.slot(0)
    assert slot.arrow.shaft_length == pytest.approx(0.5)
    assert slot.arrow.head_radius == pytest.approx(0.04)
    assert slot.axis.arrows[0].shaft_length == pytest.approx(0.6)


def test_hide_from(pool):
    pool.ensure_size(4)
    for slot in pool:
        slot.set_visible(True)
    pool.hide_from(2)
    assert [slot.arrow.visible for slot in pool] == [True, True, False, False]
    assert [slot.axis.visible for slot in pool] == [True, True, False, False]
    assert len(pool) == 4


def test_slot_beyond_size_is_an_error(pool):
    pool.ensure_size(2)
    with pytest.raises(IndexError):
        pool.slot(2)


def test_apply_style_reaches_every_slot(pool):
    pool.ensure_size(3)
    style = StyleState()
    style.set_arrow_dimensions(1.0, 0.1, 0.2, 0.15)
    style.set_axis_dimensions(2.0, 0.2)
    pool.apply_style(style)
    for slot in pool:
        assert slot.arrow.shaft_length == pytest.approx(1.0)
        assert slot.arrow.shaft_radius == pytest.approx(0.1)
        assert slot.arrow.head_length == pytest.approx(0.2)
        for arrow in slot.axis.arrows:
            assert arrow.shaft_length == pytest.approx(2.0)
            assert arrow.shaft_radius == pytest.approx(0.2)


def test_reset_poses(pool):
    pool.ensure_size(2)
    pose = Pose((1.0, 2.0, 3.0), (0.0, 0.0, 1.0, 0.0))
    for slot in pool:
        slot.arrow.set_local_pose(pose)
        slot.axis.set_local_pose(pose)
    pool.reset_poses()
    for slot in pool:
        assert slot.arrow.local_pose == IDENTITY_POSE
        assert slot.axis.local_pose == IDENTITY_POSE

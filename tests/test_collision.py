"""Tests for obstacles and hitbox collision."""

import pytest

from retro_runner.game.characters import create_character
from retro_runner.game.collision import Rect, find_collision, hitbox_of, intersects
from retro_runner.game.obstacles import (
    ObstacleType,
    advance_obstacles,
    is_off_screen,
    spawn_obstacle,
)


@pytest.fixture
def player():
    # Kangaroo standing at x=100: box 100..140 x 270..320
    return create_character("kangaroo", 100, 320)


class TestObstacles:
    @pytest.mark.parametrize("obstacle_type, size", [
        (ObstacleType.TREE, (60, 80)),
        (ObstacleType.BUSH, (50, 40)),
        (ObstacleType.ROCK, (45, 45)),
        (ObstacleType.FENCE, (50, 60)),
        (ObstacleType.RIVER, (80, 30)),
    ])
    def test_geometry(self, obstacle_type, size):
        obstacle = spawn_obstacle(obstacle_type, 800, 320, 6.0)
        assert (obstacle.width, obstacle.height) == size
        assert obstacle.x == 800
        assert obstacle.y + obstacle.height == 320

    def test_from_name(self):
        assert ObstacleType.from_name("river") is ObstacleType.RIVER
        with pytest.raises(ValueError):
            ObstacleType.from_name("lava")

    def test_off_screen_boundary(self):
        obstacle = spawn_obstacle(ObstacleType.BUSH, -50, 320, 6.0)
        assert not is_off_screen(obstacle)
        obstacle.x = -50.5
        assert is_off_screen(obstacle)

    def test_advance_moves_and_drops_in_order(self):
        gone = spawn_obstacle(ObstacleType.TREE, -55, 320, 6.0)
        kept = spawn_obstacle(ObstacleType.TREE, -48, 320, 6.0)
        fresh = spawn_obstacle(ObstacleType.ROCK, 800, 320, 7.5)
        obstacles = [gone, kept, fresh]

        removed = advance_obstacles(obstacles)

        assert removed == 1
        assert obstacles == [kept, fresh]
        assert kept.x == -54
        assert fresh.x == 792.5


class TestRect:
    def test_shrink_ten_percent_per_side(self):
        box = Rect(100, 270, 40, 50).shrink(0.1)
        assert box == Rect(104, 275, 32, 40)

    def test_touching_edges_do_not_intersect(self):
        assert not intersects(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
        assert not intersects(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))
        assert intersects(Rect(0, 0, 10, 10), Rect(9.5, 9.5, 10, 10))

    def test_contains_is_inclusive(self):
        rect = Rect(200, 120, 120, 150)
        assert rect.contains(200, 120)
        assert rect.contains(320, 270)
        assert not rect.contains(320.1, 200)


class TestFindCollision:
    def test_margin_forgives_horizontal_overlap(self, player):
        # Bounding boxes overlap by 9 units, hitboxes touch at x=136
        bush = spawn_obstacle(ObstacleType.BUSH, 131, 320, 6.0)
        assert intersects(hitbox_of(player, 0.0), hitbox_of(bush, 0.0))
        assert find_collision(player, [bush]) is None

    def test_horizontal_hit_just_inside_margin(self, player):
        bush = spawn_obstacle(ObstacleType.BUSH, 130, 320, 6.0)
        assert find_collision(player, [bush]) is bush

    def test_vertical_clearance(self, player):
        bush = spawn_obstacle(ObstacleType.BUSH, 110, 320, 6.0)

        player.y = 239  # Hitbox bottom 284 meets bush hitbox top 284
        assert find_collision(player, [bush]) is None

        player.y = 240
        assert find_collision(player, [bush]) is bush

    def test_first_hit_in_spawn_order(self, player):
        first = spawn_obstacle(ObstacleType.ROCK, 100, 320, 6.0)
        second = spawn_obstacle(ObstacleType.FENCE, 105, 320, 6.0)
        assert find_collision(player, [first, second]) is first

    def test_zero_margin_uses_full_boxes(self, player):
        bush = spawn_obstacle(ObstacleType.BUSH, 131, 320, 6.0)
        assert find_collision(player, [bush], margin=0.0) is bush

    def test_no_obstacles(self, player):
        assert find_collision(player, []) is None

from flappy_kiro.data_models import Hostile, Obstacle
from flappy_kiro.game import Direction, Game
from flappy_kiro.state import GameState, Variant
from flappy_kiro.storage import MemoryStore


def test_starts_in_character_select(game):
    assert game.state is GameState.CHARACTER_SELECT
    assert game.tick() is None


def test_navigation_wraps_and_confirm_persists(game, store):
    game.press(Direction.LEFT)
    assert game.selected_index == 2
    game.press(Direction.RIGHT)
    game.press(Direction.RIGHT)
    assert game.selected_index == 1
    assert not any(game.sim.player.keys.values())

    game.confirm()
    assert game.state is GameState.START
    assert game.characters.selected.id == "bird"
    assert store.get("flappyKiroSelectedCharacter") == "bird"


def test_saved_character_is_preselected():
    game = Game(store=MemoryStore({"flappyKiroSelectedCharacter": "star"}))
    assert game.selected_index == 2


def test_directional_press_starts_game(game):
    game.confirm()
    game.sim.score = 33
    game.press(Direction.UP)
    assert game.state is GameState.PLAYING
    assert game.sim.score == 0
    assert game.sim.player.keys["up"]

    y = game.sim.player.y
    game.tick()
    assert game.sim.player.y == y - 4
    game.release(Direction.UP)
    game.tick()
    assert game.sim.player.y == y - 4


def test_player_clamped_to_field(playing_game):
    playing_game.press(Direction.LEFT)
    for _ in range(40):
        playing_game.tick()
    assert playing_game.sim.player.x == 0


def test_confirm_fires_while_playing(playing_game):
    assert playing_game.state is GameState.PLAYING
    playing_game.confirm()
    missiles = playing_game.sim.weapon.missiles
    assert len(missiles) == 1
    player = playing_game.sim.player
    assert missiles[0].x == player.x + player.width
    assert missiles[0].y == player.y + player.height / 2


def test_cooldown_runs_on_wall_time(playing_game, clock):
    assert playing_game.fire()
    assert not playing_game.fire()
    clock.advance(499)
    playing_game.tick()
    assert not playing_game.fire()
    clock.advance(1)
    playing_game.tick()
    assert playing_game.fire()


def test_hit_scenario_scores_and_levels_up(playing_game, store):
    sim = playing_game.sim
    playing_game.fire()
    sim.hostiles = [Hostile(x=160, y=275, speed=2.5)]

    outcome = playing_game.tick()

    assert outcome.kills == 1
    assert sim.score == 10
    assert sim.levels.current_level == 2
    assert sim.hostiles == []
    assert sim.high_score == 10
    assert store.get("flappyKiroHighScore") == "10"
    assert playing_game.state is GameState.PLAYING


def test_obstacle_collision_ends_game_with_score_unchanged(playing_game, store):
    sim = playing_game.sim
    sim.score = 7
    sim.obstacles = [Obstacle(x=90, top_height=350, bottom_y=600)]

    outcome = playing_game.tick()

    assert outcome.game_over
    assert playing_game.state is GameState.GAME_OVER
    assert sim.score == 7
    assert sim.high_score == 7
    assert store.get("flappyKiroHighScore") == "7"
    assert any(p.kind == "explosion" for p in sim.particles)


def test_hostile_collision_ends_game(playing_game):
    playing_game.sim.hostiles = [Hostile(x=110, y=280, speed=0)]
    playing_game.tick()
    assert playing_game.state is GameState.GAME_OVER
    assert playing_game.sim.score == 0


def test_game_over_keeps_higher_stored_score():
    store = MemoryStore({"flappyKiroHighScore": "50"})
    game = Game(store=store)
    game.confirm()
    game.confirm()
    game.sim.score = 20
    game.game_over()
    assert store.get("flappyKiroHighScore") == "50"
    assert game.sim.high_score == 50


def test_restart_from_game_over_resets_session(playing_game):
    sim = playing_game.sim
    playing_game.fire()
    sim.score = 25
    sim.levels.recompute(25)
    sim.confetti_triggered = True
    sim.hostiles = [Hostile(x=600, y=50, speed=0)]
    sim.obstacles = [Obstacle(x=90, top_height=350, bottom_y=600)]
    playing_game.tick()
    assert playing_game.state is GameState.GAME_OVER
    sim.player.x = 400

    playing_game.press(Direction.UP)
    assert playing_game.state is GameState.GAME_OVER

    playing_game.confirm()
    assert playing_game.state is GameState.PLAYING
    assert sim.score == 0
    assert sim.frame_count == 0
    assert sim.levels.current_level == 1
    assert sim.weapon.count() == 0
    assert sim.weapon.cooldown == 0
    assert sim.hostiles == [] and sim.obstacles == []
    assert (sim.player.x, sim.player.y) == (100, 300)
    assert not sim.confetti_triggered


def test_reset_high_score_only_on_start_screen(game, store):
    store.set("flappyKiroHighScore", "40")
    game.sim.high_score = 40
    assert game.reset_high_score() is False

    game.confirm()
    assert game.reset_high_score() is True
    assert game.sim.high_score == 0
    assert store.get("flappyKiroHighScore") == "0"
    assert game.state is GameState.START


def test_trail_every_third_tick(playing_game):
    playing_game.tick()
    playing_game.tick()
    assert not any(p.kind == "trail" for p in playing_game.sim.particles)
    playing_game.tick()
    trails = [p for p in playing_game.sim.particles if p.kind == "trail"]
    assert len(trails) == 1
    assert trails[0].color == playing_game.characters.selected.color


def test_long_run_keeps_invariants(playing_game, clock):
    sim = playing_game.sim
    for _ in range(2000):
        clock.advance(16)
        if playing_game.state is not GameState.PLAYING:
            playing_game.confirm()
        playing_game.confirm()
        previous = sim.score
        playing_game.tick()
        assert 0 <= sim.weapon.count() <= 5
        assert len(sim.particles) <= 500
        assert sim.levels.current_level == sim.score // 10 + 1
        if playing_game.state is GameState.PLAYING:
            assert sim.score >= previous


def test_classic_variant_scores_passes(store, rng, clock):
    game = Game(store=store, rng=rng, clock=clock, variant=Variant.CLASSIC)
    game.confirm()
    game.confirm()
    game.sim.obstacles = [Obstacle(x=50.5, top_height=100, bottom_y=350)]
    outcome = game.tick()
    assert outcome.passes == 1
    assert game.sim.score == 1
    assert any(p.kind == "sparkle" for p in game.sim.particles)

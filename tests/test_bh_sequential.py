import io

import pytest

from parsim.bh_sequential import (
    calculate,
    compute_force,
    format_body,
    main,
    parse_input,
    update_body,
)
from parsim.octree import create_tree
from parsim.particle import G, Force, Particle
from parsim.simulation import direct_force


def _system():
    return [
        Particle(5.0e20, 2.0e5, 3.0e5, 4.0e5, 1.0, 2.0, 3.0),
        Particle(7.0e20, 6.0e5, 1.0e5, 7.0e5, -1.0, 0.5, -2.0),
        Particle(3.0e20, 4.5e5, 8.0e5, 2.5e5, 0.0, -1.0, 1.0),
        Particle(9.0e20, 8.0e5, 7.0e5, 9.0e5, 2.0, 1.0, 0.0),
    ]


def _prepared_tree(particles):
    tree = create_tree(particles)
    tree.generate_center(particles)
    return tree


def test_parse_input_reads_header_and_bodies():
    text = "2 5 6.67e-11 0.001\n1 2 3 4 5 6 7\n8 9 10 11 12 13 14\n"
    particles, iterations, g, dt = parse_input(text)
    assert iterations == 5
    assert g == 6.67e-11
    assert dt == 0.001
    assert particles == [
        Particle(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0),
        Particle(8.0, 9.0, 10.0, 11.0, 12.0, 13.0, 14.0),
    ]


def test_parse_input_rejects_missing_body_values():
    with pytest.raises(ValueError):
        parse_input("2 5 6.67e-11 0.001\n1 2 3 4 5 6 7\n8 9\n")


def test_parse_input_rejects_short_header():
    with pytest.raises(ValueError):
        parse_input("2 5")


def test_compute_force_matches_direct_sum():
    particles = _system()
    tree = _prepared_tree(particles)
    for i in range(len(particles)):
        tree_f = compute_force(i, particles, tree, G)
        exact = direct_force(i, particles)
        assert tree_f.fx == pytest.approx(exact.fx, rel=1e-9)
        assert tree_f.fy == pytest.approx(exact.fy, rel=1e-9)
        assert tree_f.fz == pytest.approx(exact.fz, rel=1e-9)


def test_compute_force_pair_is_equal_and_opposite():
    particles = _system()[:2]
    tree = _prepared_tree(particles)
    a = compute_force(0, particles, tree, G)
    b = compute_force(1, particles, tree, G)
    assert a.fx == pytest.approx(-b.fx)
    assert a.fy == pytest.approx(-b.fy)
    assert a.fz == pytest.approx(-b.fz)


def test_update_body_without_force_moves_linearly():
    body = Particle(2.0, 100.0, 200.0, 300.0, 10.0, -20.0, 30.0)
    moved = update_body(body, Force(), 0.5)
    assert (moved.px, moved.py, moved.pz) == (105.0, 190.0, 315.0)
    assert (moved.vx, moved.vy, moved.vz) == (10.0, -20.0, 30.0)
    assert body.px == 100.0


def test_update_body_bounces_at_walls():
    body = Particle(1.0, 2.0e6, -5.0, -5.0, 3.0, -4.0, 6.0)
    moved = update_body(body, Force(), 0.001)
    assert moved.vx == -3.0
    assert moved.vy == 4.0
    assert moved.vz == -6.0


def test_calculate_zero_iterations_copies_input():
    particles = _system()
    result = calculate(particles, 0, G, 0.001)
    assert result == particles
    assert all(a is not b for a, b in zip(result, particles))


def test_calculate_leaves_input_untouched():
    particles = _system()
    before = [Particle(**vars(p)) for p in particles]
    calculate(particles, 3, G, 0.001)
    assert particles == before


def test_calculate_single_body_drifts():
    body = Particle(1.0e20, 5.0e5, 5.0e5, 5.0e5, 10.0, 20.0, 30.0)
    (final,) = calculate([body], 4, G, 0.5)
    assert final.px == pytest.approx(body.px + 4 * 0.5 * body.vx)
    assert final.py == pytest.approx(body.py + 4 * 0.5 * body.vy)
    assert final.pz == pytest.approx(body.pz + 4 * 0.5 * body.vz)
    assert final.vx == body.vx


def test_calculate_conserves_momentum():
    particles = _system()
    final = calculate(particles, 5, G, 0.001)

    def momentum(bodies):
        return [
            sum(b.mass * getattr(b, axis) for b in bodies) for axis in ("vx", "vy", "vz")
        ]

    for before, after in zip(momentum(particles), momentum(final)):
        assert after == pytest.approx(before, rel=1e-9, abs=1e10)


def test_calculate_empty_system():
    assert calculate([], 10, G, 0.001) == []


def test_format_body():
    body = Particle(mass=2.0, px=1.0, py=2.5, pz=3.0, vx=-1.0, vy=0.0, vz=0.5)
    assert format_body(3, body) == "3: body[1][2.5][3] velocity: (-1, 0, 0.5) mass: 2"


def test_main_prints_result(monkeypatch, capsys):
    text = (
        "2 1 6.67e-11 0.001\n"
        "5e20 200000 300000 400000 1 2 3\n"
        "7e20 600000 100000 700000 -1 0.5 -2\n"
    )
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("time = ")
    assert lines[1] == "2"
    assert lines[2].startswith("0: body[")
    assert lines[3].startswith("1: body[")
    assert len(lines) == 4


def test_main_rejects_bad_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3 1 6.67e-11 0.001\n1 2 3\n"))
    assert main([]) == 1
    assert capsys.readouterr().err != ""
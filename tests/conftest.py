"""Test fixtures.

The hand-written fixture files under ``tests/fixtures/`` are (re)generated at
collection time so the suite does not depend on them being checked in.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from finalstate import EventHeader, Hadron, Parton, PartonShower, WriterConfig


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _ensure_fixtures(fixtures: Path) -> None:
    # Two version 3 hadron events with pt_hat, as written by a closed writer.
    _write_text(
        fixtures / "hadrons_v3.dat",
        "#\tJETSCAPE_FINAL_STATE\tv3\t|\tN\tpid\tstatus\tE\tPx\tPy\tPz\n"
        "#\tEvent\t1\tweight\t0.000123456789012345\tEPangle\t0\tN_Hadron\t2"
        "\tvertex_x\t0.5\tvertex_y\t-1.25\tvertex_z\t0\tpt_hat\t12.500000\n"
        "0 211 0 3.2 1.1 -0.4 2.9\n"
        "1 -321 0 5.75 0.2 0.3 -5.6\n"
        "#\tEvent\t2\tweight\t1\tEPangle\t0.785398\tN_Hadron\t1"
        "\tvertex_x\t0\tvertex_y\t0\tvertex_z\t0\tpt_hat\t40.000000\n"
        "0 2212 0 10.5 0 0 10.45\n"
        "#\tsigmaGen\t5.2\tsigmaErr\t0.1\n",
    )

    # Count mismatch, repeated file header and no footer.
    _write_text(
        fixtures / "broken.dat",
        "#\tJETSCAPE_FINAL_STATE\tv3\t|\tN\tpid\tstatus\tE\tPx\tPy\tPz\n"
        "#\tEvent\t1\tweight\t1\tEPangle\t0\tN_Parton\t3\n"
        "0 21 0 1 0 0 1\n"
        "1 1 0 2 0 0 2\n"
        "#\tJETSCAPE_FINAL_STATE\tv3\t|\tN\tpid\tstatus\tE\tPx\tPy\tPz\n"
        "#\tEvent\t2\tweight\t1\tEPangle\t0\tN_Parton\t1\n"
        "3 21 0 1 0 0 1\n",
    )


def pytest_configure(config):  # noqa: D401
    """Ensure fixtures exist before any tests run."""

    root = Path(__file__).resolve().parent
    _ensure_fixtures(root / "fixtures")


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def pion() -> Hadron:
    return Hadron(pid=211, status=0, e=1.0, px=0.1, py=0.2, pz=0.3)


@pytest.fixture
def header() -> EventHeader:
    return EventHeader(event_weight=1.0, pt_hat=25.0, sigma_gen=5.2, sigma_err=0.1)


@pytest.fixture
def config() -> WriterConfig:
    return WriterConfig()


def _make_shower() -> PartonShower:
    """g -> g g, then the second gluon -> q qbar."""
    ps = PartonShower()
    root = ps.add_parton(Parton(pid=21, status=0, e=100.0, px=0.0, py=0.0, pz=100.0))
    ps.add_parton(Parton(pid=21, status=0, e=40.0, px=1.0, py=0.0, pz=39.9), mother=root)
    second = ps.add_parton(Parton(pid=21, status=0, e=60.0, px=-1.0, py=0.0, pz=59.9), mother=root)
    ps.add_parton(Parton(pid=1, status=0, e=35.0, px=-0.5, py=0.5, pz=34.9), mother=second)
    ps.add_parton(Parton(pid=-1, status=0, e=25.0, px=-0.5, py=-0.5, pz=24.9), mother=second)
    return ps


@pytest.fixture
def shower() -> PartonShower:
    """g -> g g, then the second gluon -> q qbar."""
    return _make_shower()


@pytest.fixture
def shower_factory():
    """Builds showers that pytest's fixture cache does not keep alive."""
    return _make_shower

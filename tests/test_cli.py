import logging

import pytest

from adikplan.cli import main


def test_demo_deletes_second_song_entry(capsys):
    main(["-q"])
    out = capsys.readouterr().out
    remaining = out.split("Séquences restantes dans le morceau")[1]
    assert "  Index 1: Chorus Beat (1 Mesure)" in remaining
    assert "  Index 2: Intro Groove (2 Mesures)" in remaining
    assert "  Index 3:" not in remaining


def test_verbose_demo_logs_transport(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "[TRANSPORT] Lecture démarrée." in out
    assert "[TRANSPORT] Lecture arrêtée et réinitialisée." in out
    assert "--- Morceau bouclé ---" in out
    assert "Muting snare track on sequence 'Intro Groove (2 Mesures)'" in out


def test_main_restores_logger_state():
    package_logger = logging.getLogger("adikplan")
    handlers_before = list(package_logger.handlers)
    level_before = package_logger.level
    assert main(["-q"]) == 0
    assert package_logger.handlers == handlers_before
    assert package_logger.level == level_before


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "--realtime" in capsys.readouterr().out


def test_unknown_option_is_rejected():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2
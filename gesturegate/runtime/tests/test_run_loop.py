from gesturegate.core.config import DEFAULT_CONFIG, PRECISION_CONFIG
from gesturegate.runtime.run_loop import build_config, config_summary, parse_args


def test_default_args():
    args = parse_args([])
    assert build_config(args) is DEFAULT_CONFIG
    assert not args.no_magnify


def test_preset_and_overrides():
    cfg = build_config(parse_args(["--preset", "Precision"]))
    assert cfg is PRECISION_CONFIG

    cfg = build_config(parse_args(["--preset", "Precision", "--swipe-threshold", "12", "--begin-early"]))
    assert cfg.swipe_threshold == 12.0
    assert cfg.should_begin_early
    assert cfg.move_mods == PRECISION_CONFIG.move_mods


def test_summary():
    s = config_summary(DEFAULT_CONFIG)
    assert "move=command" in s
    assert "resize=command+option" in s
    assert "threshold=30" in s

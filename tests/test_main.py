import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from main import main, parse_args  # noqa: E402


def test_parse_args_defaults():
    args = parse_args([])
    assert (args.width, args.height) == (640, 640)
    assert args.position == [0.0, 0.0, 0.0]
    assert not args.cpu
    assert not args.clip_shadows


@pytest.mark.parametrize("backend", ["--cpu", "--jit"])
def test_render_to_file(tmp_path, backend):
    output = tmp_path / "frame.png"
    main([backend, "--width", "8", "--height", "6", "--yaw", "5", "--output", str(output)])

    image = plt.imread(output)
    assert image.shape == (6, 8, 4)


def test_backend_flags_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["--cpu", "--jit"])

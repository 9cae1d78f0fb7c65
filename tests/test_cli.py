from hours_parser.cli import EXIT_FAILED_LOGS, EXIT_OK, EXIT_USAGE, main


def test_usage_without_arguments(capsys):
    assert main(["main.py"]) == EXIT_USAGE

    out = capsys.readouterr().out
    assert out.startswith("Usage: main.py <path> <date> [hourly_rate]")


def test_usage_with_only_path(capsys, march_log):
    assert main(["main.py", str(march_log)]) == EXIT_USAGE
    assert "Usage:" in capsys.readouterr().out


def test_single_log(capsys, march_log):
    assert main(["main.py", str(march_log), "2019/03", "200"]) == EXIT_OK

    assert capsys.readouterr().out == "$850.00 4.25 $200.00 2 acme\n"


def test_single_log_uses_directive_rate(capsys, march_log):
    assert main(["main.py", str(march_log), "2019"]) == EXIT_OK

    assert capsys.readouterr().out == "$1250.00 6.25 $200.00 3 acme\n"


def test_project_directory(capsys, projects_dir):
    assert main(["main.py", str(projects_dir), "2019/03"]) == EXIT_OK

    lines = sorted(capsys.readouterr().out.splitlines())
    assert lines == [
        "$600.00 4.00 $150.00 2 globex",
        "$850.00 4.25 $200.00 2 acme",
    ]


def test_no_matches_is_not_an_error(capsys, projects_dir):
    assert main(["main.py", str(projects_dir), "2001"]) == EXIT_OK

    assert capsys.readouterr().out == ""


def test_debug_prints_matched_lines(capsys, monkeypatch, march_log):
    monkeypatch.setenv("DEBUG", "1")

    assert main(["main.py", str(march_log), "2019/03", "200"]) == EXIT_OK

    captured = capsys.readouterr()
    assert captured.out == "$850.00 4.25 $200.00 2 acme\n"
    assert "2019/03/05|3h30|note => 3.50" in captured.err
    assert "2019/03/12|45m|note2 => 0.75" in captured.err


def test_quiet_without_debug(capsys, march_log):
    main(["main.py", str(march_log), "2019/03", "200"])

    assert "=>" not in capsys.readouterr().err


def test_malformed_rate_argument(capsys, march_log):
    assert main(["main.py", str(march_log), "2019/03", "a lot"]) == EXIT_USAGE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "malformed hourly rate" in captured.err


def test_missing_path(capsys, tmp_path):
    assert main(["main.py", str(tmp_path / "missing"), "2019"]) == EXIT_USAGE

    assert "cannot read" in capsys.readouterr().err


def test_malformed_log_does_not_stop_other_projects(capsys, projects_dir, write_log):
    write_log("initech", "2019/03/05|3h90|overtime\n")

    assert main(["main.py", str(projects_dir), "2019/03"]) == EXIT_FAILED_LOGS

    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 2
    assert "3h90" in captured.err


def test_default_rate_from_environment(capsys, monkeypatch, write_log):
    log_path = write_log("plain", "2019/03/05|2|x\n")
    monkeypatch.setenv("HOURS_DEFAULT_RATE", "100")

    assert main(["main.py", str(log_path), "2019/03"]) == EXIT_OK

    assert capsys.readouterr().out == "$200.00 2.00 $100.00 1 plain\n"


def test_default_rate_from_config_file(capsys, tmp_path, write_log):
    log_path = write_log("plain", "2019/03/05|2|x\n")
    (tmp_path / "hours.yaml").write_text("default_rate: 120\n")

    assert main(["main.py", str(log_path), "2019/03"]) == EXIT_OK

    assert capsys.readouterr().out == "$240.00 2.00 $120.00 1 plain\n"


def test_bare_file_name_uses_working_directory(capsys, monkeypatch, march_log):
    monkeypatch.chdir(march_log.parent)

    assert main(["main.py", "log.md", "2019/03/05"]) == EXIT_OK

    assert capsys.readouterr().out == "$700.00 3.50 $200.00 1 acme\n"


def test_invalid_settings(capsys, monkeypatch, march_log):
    monkeypatch.setenv("HOURS_DEFAULT_RATE", "cheap")

    assert main(["main.py", str(march_log), "2019"]) == EXIT_USAGE
    assert "invalid settings" in capsys.readouterr().err


def test_undecodable_log_does_not_stop_other_projects(capsys, projects_dir, write_log):
    log_path = write_log("initech", "")
    log_path.write_bytes(b"2019/03/05|1|caf\xe9\n")

    assert main(["main.py", str(projects_dir), "2019/03"]) == EXIT_FAILED_LOGS

    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 2
    assert "cannot decode log" in captured.err


def test_config_file_that_is_not_a_mapping(capsys, tmp_path, march_log):
    (tmp_path / "hours.yaml").write_text("- 150\n")

    assert main(["main.py", str(march_log), "2019"]) == EXIT_USAGE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid settings" in captured.err


def test_config_file_with_yaml_syntax_error(capsys, tmp_path, march_log):
    (tmp_path / "hours.yaml").write_text("default_rate: [\n")

    assert main(["main.py", str(march_log), "2019"]) == EXIT_USAGE
    assert "malformed settings file" in capsys.readouterr().err

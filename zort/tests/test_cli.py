import pytest

from zort.cli import main, run, _get_cmdline_args

HEADER = 'name status time real space max-time max-real max-space\n'

@pytest.fixture
def workspace(tmp_path):
    (tmp_path / 'benchmarks').write_text(
        '1 /bench/a.cnf a\n2 /bench/b.cnf b\n3 /bench/c.cnf c\n')
    results = tmp_path / 'results'
    results.mkdir()
    (results / 'zummary').write_text(
        HEADER +
        'a 10 5 5 100 5000 5000 8000\n'
        'b 20 2 2 200 5000 5000 8000\n'
        'c 0 9 9 9000 5000 5000 8000\n')
    return tmp_path

def args(workspace, *extra):
    return [str(workspace / 'benchmarks'), str(workspace / 'results'), *extra]

class TestCommandLine:
    def test_options(self):
        kwargs = _get_cmdline_args(['list', 'dir', '-b', '8', '-n', '2', '--dollar', '-vv'])

        assert kwargs['options']['bucket_size'] == 8
        assert kwargs['options']['node_count'] == 2
        assert kwargs['options']['currency'] == 'dollar'
        assert kwargs['options']['keep_order'] is None
        assert kwargs['verbose'] == 2

    def test_currency_exclusive(self):
        with pytest.raises(SystemExit):
            _get_cmdline_args(['list', 'dir', '--euro', '--dollar'])

    def test_report(self, workspace, capsys):
        with pytest.raises(SystemExit) as exit:
            main(args(workspace, '-b', '1', '-n', '2'))
        assert exit.value.code == 0

        out = capsys.readouterr().out
        assert 'bucket ' in out
        assert 'cost €' in out

    def test_generate_stdout(self, workspace, capsys):
        assert run(_get_cmdline_args(args(workspace, '-b', '1', '-g'))) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert sorted(line.split(' ')[2] for line in lines) == ['a', 'b', 'c']
        assert [line.split(' ')[0] for line in lines] == ['1', '2', '3']

    def test_generate_output_file(self, workspace, capsys):
        output = workspace / 'reordered'

        assert run(_get_cmdline_args(args(workspace, '-b', '1', '-g', '-o', str(output)))) == 0
        assert len(output.read_text().splitlines()) == 3
        assert 'cost' in capsys.readouterr().out

        assert run(_get_cmdline_args(args(workspace, '-b', '1', '-g', '-o', str(output)))) == 1
        assert 'zort: error:' in capsys.readouterr().err

        assert run(_get_cmdline_args(args(workspace, '-b', '1', '-g', '-o', str(output), '--force'))) == 0

    def test_mismatch(self, workspace, capsys):
        (workspace / 'benchmarks').write_text('1 /bench/a.cnf a\n2 /bench/z.cnf z\n3 /bench/c.cnf c\n')

        assert run(_get_cmdline_args(args(workspace))) == 1

        err = capsys.readouterr().err
        assert err.startswith('zort: error:')
        assert "'b'" in err

    def test_missing_directory(self, workspace, capsys):
        assert run(_get_cmdline_args([str(workspace / 'benchmarks'), str(workspace / 'nowhere')])) == 1
        assert 'does not exist' in capsys.readouterr().err

    def test_invalid_bucket_size(self, workspace, capsys):
        assert run(_get_cmdline_args(args(workspace, '-b', '0'))) == 1
        assert 'zort: error:' in capsys.readouterr().err

    def test_invalid_utf8_input(self, workspace, capsys):
        (workspace / 'benchmarks').write_bytes(b'1 \xff\xfe\n')

        assert run(_get_cmdline_args(args(workspace))) == 1

        captured = capsys.readouterr()
        assert captured.err.startswith('zort: error:')
        assert 'line 1' in captured.err
        assert captured.out == ''

    @pytest.mark.parametrize('target', ['no/reordered', '.'])
    def test_unwritable_output(self, workspace, capsys, target):
        output = str(workspace / target)

        assert run(_get_cmdline_args(args(workspace, '-g', '-o', output, '--force'))) == 1

        captured = capsys.readouterr()
        assert captured.err.startswith('zort: error:')
        assert len(captured.err.splitlines()) == 1
        assert captured.out == ''

    def test_invalid_config_file(self, workspace, capsys):
        conf = workspace / 'zort.yaml'
        conf.write_text('bucket_size: [1\n')

        assert run(_get_cmdline_args(args(workspace, '--config', str(conf)))) == 1
        assert 'not valid YAML' in capsys.readouterr().err

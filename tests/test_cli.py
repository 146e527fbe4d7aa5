"""Tests for CLI interface."""

import json
from unittest.mock import patch

import numpy as np
import pytest

from astar_kernel.cli.main import main_cli, create_parser
from astar_kernel.cli.commands import apply_search_flags
from astar_kernel.config import ConfigManager, ConfigValidationError
from astar_kernel.search.astar import SearchConfig
from astar_kernel.cli.utils import (
    save_results, format_duration, parse_position, parse_tiles, read_text_file
)


class TestCLIParser:
    """Test CLI argument parsing."""

    def test_create_parser(self):
        """Test parser creation."""
        parser = create_parser()
        assert parser.prog == 'astar-kernel'

    def test_graph_command_parsing(self):
        """Test graph command parsing."""
        parser = create_parser()

        args = parser.parse_args(['graph', 'roads.json', '--start', 'A', '--goal', 'D'])
        assert args.command == 'graph'
        assert args.graph_file == 'roads.json'
        assert args.start == 'A'
        assert args.goal == 'D'
        assert args.heuristic == 'zero'
        assert args.tie_break is None
        assert args.max_expansions is None

        args = parser.parse_args([
            'graph', 'roads.json', '-s', 'A', '-g', 'D',
            '--heuristic', 'euclidean',
            '--max-expansions', '100',
            '--timeout', '2.5',
            '--tie-break', 'lifo',
            '--validate-costs'
        ])
        assert args.heuristic == 'euclidean'
        assert args.max_expansions == 100
        assert args.timeout == 2.5
        assert args.tie_break == 'lifo'
        assert args.validate_costs is True

    def test_graph_requires_endpoints(self):
        """Test that start and goal are mandatory for graphs."""
        parser = create_parser()

        with pytest.raises(SystemExit):
            parser.parse_args(['graph', 'roads.json', '--start', 'A'])

    def test_grid_and_puzzle_parsing(self):
        """Test grid and puzzle command parsing."""
        parser = create_parser()

        args = parser.parse_args(['grid', 'maze.txt', '--diagonal', '--heuristic', 'octile'])
        assert args.command == 'grid'
        assert args.diagonal is True
        assert args.start is None

        args = parser.parse_args(['puzzle', '1,2,3,0', '--heuristic', 'manhattan'])
        assert args.command == 'puzzle'
        assert args.tiles == '1,2,3,0'
        assert args.goal is None

        with pytest.raises(SystemExit):
            parser.parse_args(['puzzle', '1,2,3,0', '--heuristic', 'octile'])

    def test_config_command_parsing(self):
        """Test config command parsing."""
        parser = create_parser()

        args = parser.parse_args(['config', 'show'])
        assert args.command == 'config'
        assert args.config_action == 'show'

        args = parser.parse_args(['config', 'validate'])
        assert args.config_action == 'validate'

    def test_global_options(self):
        """Test global options."""
        parser = create_parser()

        args = parser.parse_args([
            '--config', 'search.tie_break=lifo',
            '-vv',
            '--output', 'out.json',
            'config', 'show'
        ])
        assert args.config == 'search.tie_break=lifo'
        assert args.verbose == 2
        assert args.output == 'out.json'
        assert args.quiet is False


class TestCLIUtils:
    """Test CLI utility functions."""

    def test_save_results(self, tmp_path):
        """Test saving results with numpy values."""
        output = tmp_path / "nested" / "results.json"
        save_results({'cost': np.float64(2.5), 'path': np.array([1, 2])}, output)

        with open(output) as f:
            data = json.load(f)
        assert data == {'cost': 2.5, 'path': [1, 2]}

    def test_format_duration(self):
        """Test duration formatting."""
        assert format_duration(0.0000005) == "0.5µs"
        assert format_duration(0.5) == "500.0ms"
        assert format_duration(5.0) == "5.00s"
        assert format_duration(125.0) == "2m 5.0s"

    def test_parse_position(self):
        assert parse_position("2, 3") == (2, 3)
        with pytest.raises(ValueError):
            parse_position("2")

    def test_parse_tiles(self):
        assert parse_tiles("1,2,3,0") == [1, 2, 3, 0]
        assert parse_tiles("1 2 3 0") == [1, 2, 3, 0]
        with pytest.raises(ValueError):
            parse_tiles(" , ")

    def test_read_text_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_text_file(tmp_path / "missing.txt")

    def test_apply_search_flags(self):
        """Command-line flags override configuration values."""
        parser = create_parser()
        manager = ConfigManager()
        manager.load_config(overrides=['search.tie_break=lifo', 'search.max_nodes_expanded=10'])

        apply_search_flags(manager, parser.parse_args(['puzzle', '1,2,3,0']))
        config = SearchConfig.from_config(manager.get_config())
        assert config.tie_break == 'lifo'
        assert config.max_nodes_expanded == 10

        args = parser.parse_args(['puzzle', '1,2,3,0', '--tie-break', 'fifo',
                                  '--max-expansions', '5', '--timeout', '1.5', '--validate-costs'])
        apply_search_flags(manager, args)
        config = SearchConfig.from_config(manager.get_config())
        assert config.tie_break == 'fifo'
        assert config.max_nodes_expanded == 5
        assert config.max_computation_time == 1.5
        assert config.validate_edge_costs is True

    @pytest.mark.parametrize("flag", [['--max-expansions', '0'], ['--timeout', '0']])
    def test_zero_budget_flags_rejected(self, flag):
        """A zero budget is an error rather than a silent fallback."""
        manager = ConfigManager()
        manager.load_config(overrides=['search.max_nodes_expanded=10', 'search.max_computation_time=5'])
        args = create_parser().parse_args(['puzzle', '1,2,3,0'] + flag)

        with pytest.raises(ConfigValidationError):
            apply_search_flags(manager, args)


class TestSearchCommands:
    """Test the search subcommands end to end."""

    @pytest.fixture
    def graph_file(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({
            'edges': [['A', 'B', 1], ['A', 'C', 4], ['B', 'D', 2], ['C', 'D', 1]],
            'nodes': ['E'],
            'coordinates': {'A': [0, 0], 'B': [1, 0], 'C': [0, 1], 'D': [1, 1]}
        }))
        return path

    @pytest.fixture
    def grid_file(self, tmp_path):
        path = tmp_path / "maze.txt"
        path.write_text("S..\n##.\nG..\n")
        return path

    def test_graph_search(self, graph_file, tmp_path, capsys):
        """A found path exits 0 and is written to the output file."""
        output = tmp_path / "result.json"
        code = main_cli(['-o', str(output), 'graph', str(graph_file), '-s', 'A', '-g', 'D',
                         '--heuristic', 'euclidean'])

        assert code == 0
        captured = capsys.readouterr()
        assert "Path:   A -> B -> D" in captured.out

        data = json.loads(output.read_text())
        assert data['success'] is True
        assert data['status'] == 'goal_found'
        assert data['path'] == ['A', 'B', 'D']
        assert data['cost'] == 3.0
        assert data['heuristic'] == 'euclidean'

    def test_graph_no_path(self, graph_file, capsys):
        """An exhausted search exits 1."""
        code = main_cli(['graph', str(graph_file), '-s', 'A', '-g', 'E'])

        assert code == 1
        assert "No path found" in capsys.readouterr().out

    def test_graph_unknown_node(self, graph_file):
        """Errors are reported through the exit code."""
        assert main_cli(['-q', 'graph', str(graph_file), '-s', 'A', '-g', 'Z']) == 1

    def test_graph_missing_file(self, tmp_path):
        assert main_cli(['-q', 'graph', str(tmp_path / "none.json"), '-s', 'A', '-g', 'D']) == 1

    def test_cancelled_search(self, graph_file, tmp_path):
        """A search stopped by its budget exits 2."""
        output = tmp_path / "result.json"
        code = main_cli(['-q', '-o', str(output), 'graph', str(graph_file), '-s', 'A', '-g', 'D',
                         '--max-expansions', '1'])

        assert code == 2
        data = json.loads(output.read_text())
        assert data['status'] == 'cancelled'
        assert data['termination_reason'] == 'max_nodes_reached'
        assert data['path'] is None

    def test_tie_break_override(self, tmp_path):
        """The configuration override and the flag both select LIFO."""
        path = tmp_path / "ties.json"
        path.write_text(json.dumps({'edges': [['A', 'D', 2], ['A', 'B', 1], ['B', 'D', 1]]}))

        for extra, expected in [([], ['A', 'D']),
                                (['--tie-break', 'lifo'], ['A', 'B', 'D'])]:
            output = tmp_path / "out.json"
            assert main_cli(['-q', '-o', str(output), 'graph', str(path), '-s', 'A', '-g', 'D'] + extra) == 0
            assert json.loads(output.read_text())['path'] == expected

        output = tmp_path / "cfg.json"
        assert main_cli(['-q', '-c', 'search.tie_break=lifo', '-o', str(output),
                         'graph', str(path), '-s', 'A', '-g', 'D']) == 0
        assert json.loads(output.read_text())['path'] == ['A', 'B', 'D']

    def test_grid_search(self, grid_file, tmp_path):
        """Test the grid command with S/G markers."""
        output = tmp_path / "grid.json"
        code = main_cli(['-q', '-o', str(output), 'grid', str(grid_file), '--heuristic', 'manhattan'])

        assert code == 0
        data = json.loads(output.read_text())
        assert data['cost'] == 6.0
        assert data['path'][0] == '0,0'
        assert data['path'][-1] == '2,0'

    def test_grid_explicit_endpoints(self, grid_file, tmp_path):
        """--start and --goal override the markers."""
        output = tmp_path / "grid.json"
        code = main_cli(['-q', '-o', str(output), 'grid', str(grid_file),
                         '--start', '0,2', '--goal', '0,0', '--diagonal', '--heuristic', 'octile'])

        assert code == 0
        assert json.loads(output.read_text())['cost'] == 2.0

    def test_grid_without_markers(self, tmp_path):
        """A map without S/G needs explicit endpoints."""
        path = tmp_path / "plain.txt"
        path.write_text("...\n...")

        assert main_cli(['-q', 'grid', str(path)]) == 1
        assert main_cli(['-q', 'grid', str(path), '--start', '0,0', '--goal', '1,2']) == 0

    def test_puzzle_search(self, tmp_path):
        """Test solving a small puzzle."""
        output = tmp_path / "puzzle.json"
        code = main_cli(['-q', '-o', str(output), 'puzzle', '1,2,3,4,0,6,7,5,8',
                         '--heuristic', 'manhattan'])

        assert code == 0
        data = json.loads(output.read_text())
        assert data['depth'] == 2
        assert data['path'][-1] == '1,2,3,4,5,6,7,8,0'

    def test_zero_expansion_budget(self):
        """--max-expansions 0 fails instead of running unbounded."""
        assert main_cli(['-q', 'puzzle', '1,2,3,4,0,6,7,5,8', '--max-expansions', '0']) == 1

    def test_unsolvable_puzzle(self):
        """An unsolvable board exhausts and exits 1."""
        assert main_cli(['-q', 'puzzle', '2,1,3,0']) == 1

    def test_invalid_puzzle(self):
        assert main_cli(['-q', 'puzzle', '1,2,3']) == 1


class TestConfigCommand:
    """Test the config subcommand."""

    def test_config_show(self, capsys):
        """Test showing the configuration with an override."""
        code = main_cli(['-c', 'search.tie_break=lifo', 'config', 'show'])

        assert code == 0
        out = capsys.readouterr().out
        assert "Current Configuration:" in out
        assert "tie_break: lifo" in out

    def test_config_validate(self, capsys):
        """Test validating the packaged configuration."""
        assert main_cli(['config', 'validate']) == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_config_validate_with_warnings(self, capsys):
        """Budgets are valid but reported."""
        assert main_cli(['-c', 'search.max_nodes_expanded=10', 'config', 'validate']) == 0
        out = capsys.readouterr().out
        assert "WARNING: max_nodes_expanded" in out
        assert "Configuration is valid" in out

    def test_config_validate_invalid(self, capsys):
        """Test validating an invalid override."""
        assert main_cli(['-c', 'search.tie_break=random', 'config', 'validate']) == 1
        assert "Configuration validation failed" in capsys.readouterr().out

    def test_config_without_action(self, capsys):
        assert main_cli(['config']) == 1


class TestMainCLI:
    """Test main CLI function."""

    def test_main_cli_no_command(self):
        """Test CLI with no command."""
        assert main_cli([]) == 1

    def test_main_cli_help(self):
        """Test CLI help."""
        with pytest.raises(SystemExit):
            main_cli(['--help'])

    @patch('astar_kernel.cli.commands.graph_command')
    def test_main_cli_graph_command(self, mock_graph):
        """Test CLI routes the graph command."""
        mock_graph.return_value = 0

        assert main_cli(['graph', 'g.json', '-s', 'A', '-g', 'B']) == 0
        mock_graph.assert_called_once()
        assert mock_graph.call_args[0][0].graph_file == 'g.json'

    @patch('astar_kernel.cli.commands.puzzle_command')
    def test_main_cli_interrupted(self, mock_puzzle):
        """Test the exit code for an interrupted run."""
        mock_puzzle.side_effect = KeyboardInterrupt

        assert main_cli(['puzzle', '1,2,3,0']) == 130

    @patch('astar_kernel.cli.commands.config_command')
    def test_main_cli_unexpected_error(self, mock_config):
        """Test the exit code for an unexpected error."""
        mock_config.side_effect = RuntimeError("boom")

        assert main_cli(['config', 'show']) == 1

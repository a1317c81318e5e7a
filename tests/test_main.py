"""
Unit tests for repochangelog.__main__ module
"""
import unittest
from unittest.mock import patch


class TestMainEntryPoint(unittest.TestCase):
    """Test the main entry point functionality"""

    def test_main_module_imports(self):
        """Test that main module can be imported"""
        import repochangelog.__main__
        self.assertTrue(hasattr(repochangelog.__main__, 'main'))

    @patch('repochangelog.cli.changelog_cmd')
    def test_main_invokes_command(self, mock_cmd):
        """main() runs the click command"""
        from repochangelog.cli import main
        main()
        mock_cmd.assert_called_once_with()

    def test_package_exports(self):
        """The public API is importable from the package"""
        import repochangelog
        for name in repochangelog.__all__:
            self.assertTrue(hasattr(repochangelog, name), name)


if __name__ == '__main__':
    unittest.main()

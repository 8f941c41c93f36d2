import pytest

from az_snapshot.core.exceptions import QueryFailedError, UserAbortError

from conftest import scripted_prompter


class TestChoose:

    def test_by_number(self):
        prompter = scripted_prompter('2')
        assert prompter.choose(['rg1', 'rg2', 'rg3'], "Choose resource group:") == 'rg2'

    def test_by_name(self):
        prompter = scripted_prompter('rg3')
        assert prompter.choose(['rg1', 'rg2', 'rg3']) == 'rg3'

    def test_invalid_input_asks_again(self):
        prompter = scripted_prompter('0', '9', 'nope', '', '1')

        assert prompter.choose(['rg1', 'rg2']) == 'rg1'
        assert len(prompter.asked) == 5
        assert 'Invalid selection' in prompter.output.getvalue()

    def test_menu_is_numbered(self):
        prompter = scripted_prompter('1')
        prompter.choose(['a', 'b'], "Pick:")

        shown = prompter.output.getvalue().splitlines()
        assert shown[:3] == ['Pick:', '1) a', '2) b']

    def test_nothing_to_choose(self):
        prompter = scripted_prompter()
        with pytest.raises(QueryFailedError):
            prompter.choose([], "Choose resource group:")

    def test_end_of_input_aborts(self):
        prompter = scripted_prompter()
        with pytest.raises(UserAbortError):
            prompter.choose(['rg1'])


class TestAskNonEmpty:

    def test_repeats_until_value(self):
        prompter = scripted_prompter('', '   ', 'nightly')

        assert prompter.ask_non_empty("Enter name: ") == 'nightly'
        assert prompter.asked == ["Enter name: "] * 3


class TestConfirm:

    @pytest.mark.parametrize('answer', ['y', 'Y', 'yes', 'Yup'])
    def test_yes(self, answer):
        assert scripted_prompter(answer).confirm("About to do it") is True

    @pytest.mark.parametrize('answer', ['n', 'N', '', 'no', ' ', 'sure'])
    def test_anything_else_is_no(self, answer):
        assert scripted_prompter(answer).confirm() is False

    def test_shows_message(self):
        prompter = scripted_prompter('y')
        prompter.confirm("About to restore snapshot snap1")

        assert "About to restore snapshot snap1" in prompter.output.getvalue()
        assert prompter.asked == ["Continue [Y/N]? "]

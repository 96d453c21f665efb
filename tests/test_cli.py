import json

import pytest

import cli
from errors import ConfigurationError
from ingest import GitHubProvider, JiraProvider, default_providers
from models import ActivityItem, AtlassianInstance


@pytest.fixture(autouse=True)
def no_env_file(monkeypatch):
    monkeypatch.setattr(cli, 'load_env_file', lambda path=None: False)


@pytest.fixture
def use_providers(monkeypatch):
    def _use(*providers):
        monkeypatch.setattr(cli, 'default_providers', lambda: list(providers))
    return _use


def _example_providers(static_provider):
    jira = static_provider('Jira', [ActivityItem('Fix login bug', 'Jira'), ActivityItem('Add export button', 'Jira')])
    github = static_provider('GitHub', [ActivityItem('Refactor auth', 'GitHub')])
    return jira, github


def test_end_to_end_report(static_provider, use_providers, capsys):
    use_providers(*_example_providers(static_provider))

    assert cli.main(['2025-06-01']) == 0

    out = capsys.readouterr().out
    assert out == (
        'Activity for 2025-06-01:\n'
        '\n'
        'Add export button | Jira\n'
        'Fix login bug | Jira\n'
        'Refactor auth | GitHub\n'
        '\n'
        'Total: 3 activities\n'
    )


def test_running_twice_gives_identical_output(static_provider, use_providers, capsys):
    use_providers(*_example_providers(static_provider))
    cli.main(['2025-06-01', '--no-header'])
    first = capsys.readouterr().out
    cli.main(['2025-06-01', '--no-header'])
    second = capsys.readouterr().out
    assert first == second
    assert first.startswith('Add export button | Jira\n')


def test_defaults_to_today(static_provider, use_providers, monkeypatch, capsys):
    jira, github = _example_providers(static_provider)
    use_providers(jira, github)
    monkeypatch.setattr(cli, 'today', lambda: '2030-01-02')

    assert cli.main([]) == 0
    assert jira.calls == ['2030-01-02']
    assert 'Activity for 2030-01-02:' in capsys.readouterr().out


@pytest.mark.parametrize('bad', ['2024-1-01', '20240101', '2024-01-1', ''])
def test_invalid_date_exits_before_any_io(bad, monkeypatch, capsys):
    def _boom():
        raise AssertionError('providers must not be built for an invalid date')

    monkeypatch.setattr(cli, 'default_providers', _boom)
    assert cli.main([bad]) == 1
    captured = capsys.readouterr()
    assert 'Invalid date format' in captured.err
    assert captured.out == ''


def test_failing_provider_still_reports_the_others(static_provider, failing_provider, use_providers, capsys):
    use_providers(
        failing_provider('Jira', ConfigurationError('At least one Atlassian instance must be configured')),
        static_provider('GitHub', [ActivityItem('Refactor auth', 'GitHub')]),
    )
    assert cli.main(['2025-06-01', '--no-header']) == 0
    assert capsys.readouterr().out == 'Refactor auth | GitHub\n\nTotal: 1 activities\n'


def test_fatal_error_exits_non_zero(monkeypatch, capsys):
    def _boom():
        raise RuntimeError('boom')

    monkeypatch.setattr(cli, 'default_providers', _boom)
    assert cli.main(['2025-06-01']) == 1
    assert 'Fatal error: boom' in capsys.readouterr().err


def test_provider_filter(static_provider, use_providers, capsys):
    jira, github = _example_providers(static_provider)
    use_providers(jira, github)

    assert cli.main(['2025-06-01', '--provider', 'GitHub', '--no-header']) == 0
    assert jira.calls == []
    assert capsys.readouterr().out == 'Refactor auth | GitHub\n\nTotal: 1 activities\n'


def test_unknown_provider_is_rejected():
    with pytest.raises(SystemExit) as info:
        cli.main(['2025-06-01', '--provider', 'gitlab'])
    assert info.value.code == 2


def test_json_format(static_provider, use_providers, capsys):
    use_providers(*_example_providers(static_provider))
    assert cli.main(['2025-06-01', '--format', 'json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['total'] == 3
    assert [a['title'] for a in data['activities']] == ['Add export button', 'Fix login bug', 'Refactor auth']


def test_real_providers_with_faked_backends(monkeypatch, capsys, fake_response, make_issue):
    """Whole pipeline through JiraProvider and GitHubProvider with HTTP and gh replaced."""
    def fake_get(url, **kwargs):
        return fake_response(200, {'issues': [make_issue('PLAT-2', 'Fix login bug'), make_issue('PLAT-1', 'Add export button')]})

    async def fake_gh(args):
        if args[1] == 'commits':
            return json.dumps([{'commit': {'message': 'Refactor auth\n\nmore'}}])
        return '[]'

    monkeypatch.setattr('ingest.jira.requests.get', fake_get)
    monkeypatch.setattr(cli, 'default_providers', lambda: [
        JiraProvider([AtlassianInstance('acme', 'me@acme.com', 'tok')]),
        GitHubProvider(runner=fake_gh),
    ])

    assert cli.main(['2025-06-01', '--no-header']) == 0
    assert capsys.readouterr().out == (
        'PLAT-1: Add export button | Jira\n'
        'PLAT-2: Fix login bug | Jira\n'
        'Refactor auth | GitHub\n'
        '\n'
        'Total: 3 activities\n'
    )


def test_default_registry_reads_instances_from_env():
    env = {'ATLASSIAN_1_DOMAIN': 'acme', 'ATLASSIAN_1_ACCOUNT_EMAIL': 'me@acme.com', 'ATLASSIAN_1_API_TOKEN': 'tok'}
    providers = default_providers(env)
    assert [p.name for p in providers] == ['Jira', 'GitHub']
    assert [i.domain for i in providers[0].instances] == ['acme']

from __future__ import annotations

from ircstream.irc import IRCChannel, IRCMessage


def test_channel_view_matches_first_param_case_insensitively(client, transport):
    channel = IRCChannel(client, "#Test")
    seen: list[IRCMessage] = []
    channel.messages.subscribe(seen.append)
    transport.receive(
        ":a!u@h PRIVMSG #test :lower\r\n"
        ":a!u@h PRIVMSG #TEST :upper\r\n"
        ":a!u@h PRIVMSG #other :elsewhere\r\n"
        ":a!u@h PRIVMSG me :#test in text\r\n"
        "PING\r\n"
    )
    assert [m.params[1] for m in seen] == ["lower", "upper"]


def test_channel_view_excludes_messages_without_params(client, transport):
    channel = IRCChannel(client, "#test")
    seen: list[IRCMessage] = []
    channel.messages.subscribe(seen.append)
    transport.receive("QUIT\r\n:srv AWAY\r\n")
    assert seen == []


def test_join_and_send_message(client, transport):
    channel = IRCChannel(client, "#Test")
    channel.join()
    channel.send_message("hello world")
    assert transport.lines == ["JOIN :#Test\r\n", "PRIVMSG #Test :hello world\r\n"]


def test_channel_command_stream(client, transport):
    channel = IRCChannel(client, "#c")
    joins: list[str] = []
    channel.command_stream("JOIN").subscribe(lambda m: joins.append(m.nick or ""))
    transport.receive(":alice!u@h JOIN #c\r\n:bob!u@h PRIVMSG #c :hi\r\n:carol!u@h JOIN #d\r\n")
    assert joins == ["alice"]


def test_channel_views_are_stateless_and_independent(client, transport):
    first = IRCChannel(client, "#c")
    second = IRCChannel(client, "#C")
    a: list[str] = []
    b: list[str] = []
    sub = first.messages.subscribe(lambda m: a.append(m.params[-1]))
    second.messages.subscribe(lambda m: b.append(m.params[-1]))
    transport.receive("PRIVMSG #c :1\r\n")
    sub.unsubscribe()
    transport.receive("PRIVMSG #c :2\r\n")
    assert a == ["1"]
    assert b == ["1", "2"]


def test_send_message_cannot_inject_a_second_command(client, transport):
    IRCChannel(client, "#c").send_message("hi\r\nQUIT :gone")
    assert transport.lines == ["PRIVMSG #c :hiQUIT :gone\r\n"]

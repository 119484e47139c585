from slai.prompt import Prompt, PromptEntry, Role


def test_entry_str_uses_role_label():
    assert str(PromptEntry(Role.USER, "hello")) == "[User] hello"
    assert str(PromptEntry(Role.ASSISTANT, "hi")) == "[Assistant] hi"
    assert str(PromptEntry(Role.SYSTEM, "be nice")) == "[System] be nice"


def test_append_keeps_order_and_roles():
    prompt = Prompt()
    prompt.append_system("sys")
    prompt.append_user("question")
    prompt.append_assistant("answer")
    assert [entry.role for entry in prompt.entries] == [
        Role.SYSTEM,
        Role.USER,
        Role.ASSISTANT,
    ]
    assert [entry.text for entry in prompt.entries] == ["sys", "question", "answer"]


def test_prompt_str_is_one_line_per_entry():
    prompt = Prompt()
    prompt.append_user("question")
    prompt.append_assistant("answer")
    lines = str(prompt).splitlines()
    assert lines == [str(entry) for entry in prompt.entries]
    assert str(prompt).endswith("\n")


def test_empty_prompt_str_is_empty():
    assert str(Prompt()) == ""


def test_to_jinja_input():
    prompt = Prompt()
    prompt.append_user("question")
    prompt.append_assistant("answer")
    prompt.append_system("sys")
    assert prompt.to_jinja_input() == {
        "messages": [
            {"role": "user", "content": "question"},
            {"role": "assistant", "content": "answer"},
            {"role": "system", "content": "sys"},
        ]
    }


def test_clear_removes_everything():
    prompt = Prompt()
    prompt.append_user("question")
    prompt.clear()
    assert prompt.entries == []
    assert prompt.to_jinja_input() == {"messages": []}
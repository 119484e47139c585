import pytest

from slai.chat_template import ChatTemplate
from slai.gguf import Gguf
from slai.metadata import MetadataValue, MetadataValueType
from slai.prompt import Prompt


def _gguf(metadata):
    return Gguf(version=3, metadata=metadata, tensors={})


def test_template_rewrites_split_and_last_index():
    template = ChatTemplate("{{ x.split(' ')[-1] }}")
    assert template.template == "{{ x|split(' ')|last }}"


def test_apply_renders_messages_and_globals():
    template = ChatTemplate(
        "{{ bos_token }}{% for m in messages %}{{ m.role }}:{{ m.content }};{% endfor %}"
        "{% if add_generation_prompt %}{{ eos_token }}{% endif %}"
    )
    prompt = Prompt()
    prompt.append_user("question")
    prompt.append_assistant("answer")
    rendered = template.apply(prompt, "<s>", "</s>")
    assert rendered == "<s>user:question;assistant:answer;</s>"


def test_apply_split_and_last():
    template = ChatTemplate("{{ messages[0].content.split(' ')[-1] }}")
    prompt = Prompt()
    prompt.append_user("one two three")
    assert template.apply(prompt, "", "") == "three"


def test_trim_blocks_drops_newline_after_tag():
    template = ChatTemplate("{% if add_generation_prompt %}\nA{% endif %}")
    assert template.apply(Prompt(), "", "") == "A"


def test_from_gguf_uses_metadata():
    gguf = _gguf(
        {
            "tokenizer.chat_template": MetadataValue(
                MetadataValueType.STRING, "{{ bos_token }}"
            )
        }
    )
    template = ChatTemplate.from_gguf(gguf)
    assert template.template == "{{ bos_token }}"
    assert template.apply(Prompt(), "<s>", "</s>") == "<s>"


def test_from_gguf_falls_back_to_default():
    template = ChatTemplate.from_gguf(_gguf({}), default="{{ eos_token }}")
    assert template == ChatTemplate("{{ eos_token }}")


def test_from_gguf_without_template_or_default_raises():
    with pytest.raises(LookupError):
        ChatTemplate.from_gguf(_gguf({}))


def test_from_gguf_rejects_non_string_template():
    gguf = _gguf({"tokenizer.chat_template": MetadataValue(MetadataValueType.U32, 7)})
    with pytest.raises(TypeError):
        ChatTemplate.from_gguf(gguf)
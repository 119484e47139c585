# slai

A small library and command for GGUF model files.

## What is in the package

- `slai.gguf`: `Gguf.from_bytes` and `Gguf.from_path` parse a GGUF file into its
  version, a `metadata` dictionary and a `tensors` dictionary of `GgufTensor`.
  Tensor values are loaded for F32 and F16 tensors; quantized tensors keep their
  type, dimensions and file offset only. `metadata_debug_strings` and
  `tensors_debug_strings` give one line per entry.
- `slai.metadata`: the metadata value types (`MetadataValue`, `MetadataArray`,
  `MetadataValueType`), the little-endian `ByteReader`, and the parse errors.
- `slai.prompt`: `Prompt`, an ordered list of user, assistant and system messages.
- `slai.chat_template`: `ChatTemplate` renders a `Prompt` with a Jinja chat
  template, such as the `tokenizer.chat_template` stored in a model file.
- `slai.sampler`: `SamplerParams`, the token sampling settings (top-k, locally
  typical, top-p, temperature) and the ordered list of enabled stages.
- `slai.models`: `model_kind` and `tokenizer_kind` tell which model family
  (llama, qwen2, segment-anything) and tokenizer (llama, gpt2) a file declares.
- `slai.shapes` and `slai.conv`: output shapes of tensor operations: matrix
  products, repeat, window partitioning, relative positions, im2col, 2D
  convolutions and transposed 2D convolutions.

## Installation

```
pip install .
```

## Command line

Load a model file, print how long loading took and the model architecture:

```
slai path/to/model.gguf
```

Add `--inspect` to also print the file's metadata and tensor shapes:

```
slai path/to/model.gguf --inspect
```

The command exits with status 1 when the file cannot be read or parsed, or when
its architecture is not one of the known families. The `--image` and
`--headless` options are accepted but have no effect.

## Library use

```python
from slai.gguf import Gguf
from slai.chat_template import ChatTemplate
from slai.prompt import Prompt
from slai.models import model_kind

gguf = Gguf.from_path("model.gguf")
print(model_kind(gguf).display_name())

for line in gguf.metadata_debug_strings():
    print(line)

prompt = Prompt()
prompt.append_system("You are a helpful assistant.")
prompt.append_user("Give me a chocolate cake recipe.")

template = ChatTemplate.from_gguf(gguf, default="{% for m in messages %}{{ m.content }}\n{% endfor %}")
print(template.apply(prompt, bos="<s>", eos="</s>"))
```

`ChatTemplate.from_gguf` raises `LookupError` when the file has no chat template
and no default is given. Errors met while parsing a file are raised as
subclasses of `slai.metadata.GgufParseError`, such as `IncorrectMagicNumberError`
for data that is not GGUF at all.

## What it does not do

The package does not run models. It has no GPU code, no tokenizers, no text
generation or interactive chat, and no image segmentation; the shape helpers
compute the sizes of tensor operations without performing them. Quantized
tensor data is not decoded, and legacy GGML `.bin` files are read with the
GGUF parser only.

## Tests

```
pip install ".[test]"
pytest
```
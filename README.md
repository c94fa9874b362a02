# wordmesh

wordmesh counts the words of a text file by spreading the work over
several processes that talk to each other over TCP.

The pieces:

- **client** (`wordmesh.client`) – reads a file, scrambles it with a
  one-byte XOR key and sends the key byte followed by the scrambled bytes
  to the server.
- **server** (`wordmesh.server.Server`) – listens on port 9000 and handles
  each client in its own thread. It stores both the scrambled and the
  unscrambled copy, splits the text into one part per node (three by
  default) with as even a number of words as possible, and hands each
  part to a node.
- **node** (`wordmesh.node.WordNode`) – listens on its own port, counts
  the words of the part it receives and sends back a list of
  `word: count` lines.
- Once every node has answered, the server merges the lists, prints the
  most frequent word, and signals it bit by bit to a character device
  (by default `/dev/ArduinoDriver3`): a write of fourteen `1`s for a set
  bit and five `0`s for a clear one, with a pause (1.4 seconds by
  default) after each bit.

How words are counted: a word is a run of ASCII letters, digits or
bytes of 128 and above; everything is lower-cased and words are cut to
49 bytes. A word is only counted once a separator follows it, so a word
at the very end of a part with nothing after it is not counted. At most
10,000 distinct words are kept.

## Installing

```
pip install .
```

Tests run with:

```
pip install .[test]
pytest
```

## Running

The programs keep their files relative to a base directory (the current
directory unless `--base-dir` is given) and create the directories they
need:

- node: `NodeFiles/Input_server_files/Input_<port>.txt` and
  `NodeFiles/words_lists/list_<port>.txt`
- server: `ServerFiles/Input_files/archivo_cifrado.txt` and
  `archivo_decifrado.txt`, `ServerFiles/Split_files/part_<n>.txt`,
  `ServerFiles/Words_lists/list_<port>.txt`

Start one node per port (9001, 9002 and 9003 by default), each in its
own terminal:

```
wordmesh-node 9001
wordmesh-node 9002
wordmesh-node 9003
```

Start the server:

```
wordmesh-server
```

Its options: `--port` (default 9000), `--base-dir`, `--node-port`
(repeat it once per node; defaults to 9001, 9002, 9003), `--host` where
the nodes run (default `127.0.0.1`), `--device` and `--delay` for the
signalling.

Then send a file:

```
wordmesh-client
```

By default the client sends `ClientFiles/el_quijote.txt` to
`127.0.0.1:9000` with the key `wordmesh.cipher.DEFAULT_KEY`. A different
file can be given as an argument, with `--host`, `--port` and `--key`
(a number such as `90` or `0x5a`) to change the rest.

To check the device signalling on its own, without the rest of the
system:

```
wordmesh-arduino [DEVICE] [WORD] [--delay SECONDS]
```

## Using it as a library

The building blocks are importable:

```python
from wordmesh.cipher import DEFAULT_KEY, xor_cipher
from wordmesh.wordcount import count_words, format_word_list
from wordmesh.textparts import part_sizes, split_words, most_frequent

scrambled = xor_cipher(b"hello", DEFAULT_KEY)
assert xor_cipher(scrambled, DEFAULT_KEY) == b"hello"

counts = count_words(b"The cat and the hat ")
print(format_word_list(counts))   # b"the: 2\ncat: 1\nand: 1\nhat: 1\n"
print(most_frequent(counts))      # (b"the", 2)

print(part_sizes(10, 3))          # [4, 3, 3]
print(split_words("a b c d".split(), 2))
```

`wordmesh.textparts` also offers `split_file`, `parse_word_list`,
`merge_word_lists` and `most_freq_word`; `wordmesh.arduino` offers
`arduino_write`, `char_bits` and `send_word_as_binary`.
`wordmesh.node.WordNode`, `wordmesh.server.Server` and
`wordmesh.node_manager.create_nodes` (with `NodeTask` and `send_part`)
carry the networked parts, should you want to wire them up in your own
process.

## What it does not do

- It does not include the driver behind `/dev/ArduinoDriver3`. Without
  such a device every write fails; the failure is logged and the
  signalling carries on, so the rest of the system still works.
- A node that cannot be reached is logged and left out of the merge; if
  no node returns any words the client's file yields no result.
- The XOR scrambling is not encryption in any real sense and the
  connections carry no authentication.
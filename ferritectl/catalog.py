from dataclasses import dataclass


@dataclass(frozen=True)
class CommandDoc:
    name: str
    args: str
    description: str

    @property
    def syntax(self) -> str:
        return f"{self.name} {self.args}".rstrip()


_DOCS = [
    CommandDoc("GET", "key", "Get the value of a key. Returns nil if the key does not exist."),
    CommandDoc(
        "SET", "key value [EX seconds] [PX ms] [NX|XX]",
        "Set key to hold the string value. EX sets expiry in seconds, PX in milliseconds. "
        "NX only sets if key does not exist, XX only if it exists."
    ),
    CommandDoc("DEL", "key [key ...]", "Removes the specified keys. Returns the number of keys removed."),
    CommandDoc("EXISTS", "key [key ...]", "Check if key exists"),
    CommandDoc("EXPIRE", "key seconds", "Set key expiration"),
    CommandDoc("TTL", "key", "Get time to live"),
    CommandDoc("INCR", "key", "Increment value"),
    CommandDoc("DECR", "key", "Decrement value"),
    CommandDoc(
        "HSET", "key field value [field value ...]",
        "Sets field in the hash stored at key to value. Returns the number of fields added."
    ),
    CommandDoc("HGET", "key field", "Get hash field"),
    CommandDoc("HGETALL", "key", "Get all hash fields"),
    CommandDoc(
        "LPUSH", "key value [value ...]",
        "Insert values at the head of the list. Returns the length of the list after the push."
    ),
    CommandDoc("RPUSH", "key value [value ...]", "Push to list tail"),
    CommandDoc("LRANGE", "key start stop", "Get list range"),
    CommandDoc("SADD", "key member [member ...]", "Add to set"),
    CommandDoc("SMEMBERS", "key", "Get set members"),
    CommandDoc(
        "ZADD", "key [NX|XX] [GT|LT] [CH] score member [score member ...]",
        "Adds members with scores to a sorted set. Returns the number of elements added."
    ),
    CommandDoc("ZRANGE", "key start stop [WITHSCORES]", "Get sorted set range"),
    CommandDoc(
        "XADD", "key [NOMKSTREAM] [MAXLEN|MINID [=|~] threshold] *|id field value [field value ...]",
        "Appends an entry to a stream. Returns the ID of the added entry."
    ),
    CommandDoc("XREAD", "[COUNT n] [BLOCK ms] STREAMS key [key ...] id [id ...]", "Read from stream"),
    CommandDoc("PUBLISH", "channel message", "Publish message"),
    CommandDoc("SUBSCRIBE", "channel [channel ...]", "Subscribe to channel"),
    CommandDoc("MULTI", "", "Start transaction"),
    CommandDoc("EXEC", "", "Execute transaction"),
    CommandDoc("PING", "", "Ping server"),
    CommandDoc("INFO", "[section]", "Get server info"),
    CommandDoc("SCAN", "cursor [MATCH pattern] [COUNT count]", "Incrementally iterate the keyspace"),
    CommandDoc("TYPE", "key", "Get the type of the value stored at key"),
    CommandDoc("FLUSHDB", "", "Remove all keys from the current database"),
    CommandDoc("VECTOR.SEARCH", "index vector TOP_K n", "Vector similarity search"),
    CommandDoc("TS.ADD", "key timestamp value", "Add time series sample"),
    CommandDoc("DOC.INSERT", "collection id document", "Insert document"),
]

COMMAND_DOCS: dict[str, CommandDoc] = {doc.name: doc for doc in _DOCS}


def lookup(name: str) -> CommandDoc | None:
    return COMMAND_DOCS.get(name.upper())


def complete(prefix: str) -> list[str]:
    prefix = prefix.upper()
    return sorted(name for name in COMMAND_DOCS if name.startswith(prefix))

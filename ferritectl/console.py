from dataclasses import dataclass
from typing import Callable, Self

from ferritectl.browser import KeyBrowser
from ferritectl.executor import CommandExecutor
from ferritectl.retry import ReconnectPolicy
from ferritectl.session import Session, TransportFactory
from ferritectl.settings import FerriteSettings
from ferritectl.transport import RedisTransport


@dataclass
class Console:
    """Everything a REPL command needs, wired around one session."""

    settings: FerriteSettings
    session: Session
    browser: KeyBrowser
    executor: CommandExecutor
    ask: Callable[[str], str] = input

    @classmethod
    def create(
        cls,
        settings: FerriteSettings,
        transport_factory: TransportFactory = RedisTransport.from_profile,
        ask: Callable[[str], str] = input,
        policy: ReconnectPolicy | None = None,
    ) -> Self:
        session = Session(settings, transport_factory=transport_factory, policy=policy)
        browser = KeyBrowser(
            session,
            root_limit=settings.root_limit,
            namespace_limit=settings.namespace_limit,
            batch_size=settings.scan_batch_size,
        )
        executor = CommandExecutor(session, settings.output_format)
        return cls(settings=settings, session=session, browser=browser, executor=executor, ask=ask)

    @property
    def prompt(self) -> str:
        profile = self.session.profile
        if profile is None:
            return "ferrite(disconnected)> "
        return f"ferrite({profile.address})> "

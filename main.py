from rich.pretty import pprint

from slotargs import *


class Config:
    def __init__(self):
        self.keep_alive = False
        self.ports = []
        self.paths = []
        self.home = ""
        self.release = False
        self.files = []


config = Config()

app = (
    Application(
        "fht2p", "0.5.0",
        descr="A HTTP Server for Static File.",
        allow_zero_args=True,
        authors=[("Wspsxing", "biluohc@qq.com")],
        addresses=[("GitHub", "https://biluohc.github.com/fht2p")],
    )
    .opt(Option("keep-alive", Switch(into=(config, "keep_alive")), "-k", "--keep-alive", descr="open keep-alive"))
    .opt(Option("ports", Vector("u32", config.ports), "-p", "--port", policy=Policy.bounded(), descr="Sets listening port"))
    .args(Cardinal("PATHS", Vector("str", config.paths), optional=True, descr="Sets the path to share"))
    .cmd(
        Command("run", "r", descr="run the server")
        .opt(Option("home", Scalar("str", into=(config, "home")), "-H", "--home", optional=True, descr="running in the home"))
    )
    .cmd(
        Command("build", "b", descr="build the file")
        .opt(Option("release", Switch(into=(config, "release")), "-r", "--release", descr="Build artifacts in release mode"))
        .args(Cardinal("File", Vector("str", config.files), descr="File to build"))
    )
)


if __name__ == '__main__':
    outcome = invoke(app)
    pprint(outcome)
    pprint(vars(config))

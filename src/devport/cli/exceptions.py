from devport.shared.exceptions import DevportError


class ServeError(DevportError):
    pass


class ProxyURLMissingScheme(ServeError):
    def __init__(self, proxy: str):
        self.proxy = proxy
        super().__init__(
            f"You need to include a protocol with the proxy URL. Try --proxy http://{proxy}"
        )


class ElevationDenied(ServeError):
    def __init__(self, message: str = "Administrator rights are required to start the development server"):
        super().__init__(message)

from typing import Dict, List, Optional

from loguru import logger

from .errors import UnresolvedNamespaceError


class NamespaceTable:
    """
    Mapping of namespace URIs to the prefixes declared for them.

    A URI can be declared again inside the scope of an earlier declaration,
    so each URI keeps a stack of prefixes and the innermost one wins.
    One table belongs to exactly one parse.
    """

    def __init__(self) -> None:
        self._prefixes: Dict[str, List[Optional[str]]] = {}

    def __repr__(self):
        return "<NamespaceTable {}>".format(self.nsmap())

    def __contains__(self, uri: str) -> bool:
        return bool(self._prefixes.get(uri))

    def __len__(self):
        return sum(len(v) for v in self._prefixes.values())

    def push(self, uri: str, prefix: Optional[str]) -> None:
        if uri == '':
            logger.warning(
                "Namespace prefix '{}' resolves to empty URI. "
                "This might be a packer.".format(prefix)
            )
        stack = self._prefixes.setdefault(uri, [])
        if prefix in stack:
            logger.debug(
                "Namespace mapping ({}, {}) already seen!".format(prefix, uri)
            )
        stack.append(prefix)

    def pop(self, uri: Optional[str], prefix: Optional[str]) -> None:
        stack = self._prefixes.get(uri)
        if not stack or prefix not in stack:
            logger.warning(
                "Reached a NAMESPACE_END without having the namespace stored before? "
                "Prefix: {}, URI: {}".format(prefix, uri)
            )
            return
        # remove the innermost matching declaration
        del stack[len(stack) - 1 - stack[::-1].index(prefix)]
        if not stack:
            del self._prefixes[uri]

    def prefix_for(self, uri: str) -> Optional[str]:
        """
        Return the prefix currently declared for `uri`.

        :raises UnresolvedNamespaceError: if the URI is not declared
        """
        stack = self._prefixes.get(uri)
        if not stack:
            raise UnresolvedNamespaceError(uri)
        return stack[-1]

    def qualified_name(self, uri: str, local_name: str) -> str:
        """
        Build `prefix:local_name`, or the bare local name if there is no
        namespace or the namespace is the default namespace.

        :raises UnresolvedNamespaceError: if `uri` is not empty and not declared
        """
        if not uri:
            return local_name
        prefix = self.prefix_for(uri)
        if not prefix:
            return local_name
        return "{}:{}".format(prefix, local_name)

    def nsmap(self) -> Dict[Optional[str], str]:
        """
        Returns the current namespace mapping as a dictionary prefix -> uri
        """
        return {stack[-1]: uri for uri, stack in self._prefixes.items()}

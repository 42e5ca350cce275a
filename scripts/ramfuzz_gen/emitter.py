"""
Harness emitter module

Renders a HarnessDescriptor as a C++ wrapper class declaration.
"""

from .codegen import CodeGen
from .harness import HarnessDescriptor, HarnessStub

# Namespace holding all generated wrappers
HARNESS_NAMESPACE = 'ramfuzz'


class HarnessEmitter:
    """Generates wrapper class declarations"""

    def __init__(self, namespace: str = HARNESS_NAMESPACE):
        self.namespace = namespace

    def generate(self, desc: HarnessDescriptor, gen: CodeGen):
        """Generate the wrapper for one class"""
        gen.line(f'namespace {self.namespace} {{')
        with gen.block(f'class {desc.type_name} {{', '};'):
            # pobj must be declared before obj so it outlives every use of obj
            gen.raw(' private:')
            gen.line('// Owns internally created objects. Must precede obj declaration.')
            gen.line(f'std::unique_ptr<{desc.class_name}> pobj;')
            gen.raw(' public:')
            gen.line(f'{desc.class_name}& obj; // Object under test.')
            self._gen_ref_constructor(desc, gen)

            for stub in desc.stubs:
                self._gen_stub(desc, stub, gen)

            if desc.has_constructors:
                gen.line('// Creates obj internally, using indicated constructor.')
                gen.line(f'{desc.type_name}(unsigned ctr);')

            self._gen_roulette(desc, gen)
        gen.line(f'}} // namespace {self.namespace}')

    def _gen_ref_constructor(self, desc: HarnessDescriptor, gen: CodeGen):
        """Generate constructor wrapping an object created by the caller"""
        gen.line(f'{desc.type_name}({desc.class_name}& obj)')
        gen.line('  : obj(obj) {} // Object already created by caller.')

    def _gen_stub(self, desc: HarnessDescriptor, stub: HarnessStub, gen: CodeGen):
        """Generate a stub declaration"""
        if stub.is_constructor:
            gen.line(f'{desc.class_name}* {stub.name}();')
        else:
            gen.line(f'void {stub.name}();')

    def _gen_roulette(self, desc: HarnessDescriptor, gen: CodeGen):
        """Generate the method dispatch table (constructors excluded)"""
        gen.line(f'using mptr = void ({desc.type_name}::*)();')
        gen.line(f'static mptr roulette[{desc.method_count}];')


def emit(desc: HarnessDescriptor) -> str:
    """Render one descriptor to a string"""
    gen = CodeGen()
    HarnessEmitter().generate(desc, gen)
    return gen.output()

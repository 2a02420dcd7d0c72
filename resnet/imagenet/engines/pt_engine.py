"""
@Author: DAShaikh10
@Description: PyTorch engine for building, inspecting and evaluating ImageNet Residual Networks (ResNets).
"""

import torch
import torchinfo

from torch import nn

from utils import enums
from resnet import ResNetConfig
from resnet.errors import ConfigurationError
from resnet.imagenet.models import ModelConfig, TorchResNet


class TorchResNetEngine:
    """
    PyTorch engine for ImageNet ResNet.
    """

    def __init__(self, config: ResNetConfig):
        self._generator = torch.random.manual_seed(config.seed)  # Sets the global random seed.

        self.config = config
        self.device = None

        # Auto-detect and set device (GPU if available, else CPU).
        self._setup_device()
        self.model: TorchResNet = None
        self.model_config: ModelConfig = None

    def _setup_device(self):
        """
        Setup the device for the model. Auto-detects GPU > CPU when no device is specified.
        """

        if self.config.device is None:
            if torch.cuda.is_available():
                self.device = torch.device("cuda")
                print(f"GPU detected: {torch.cuda.get_device_name(0)}")
                print("Using GPU.")
            else:
                self.device = torch.device("cpu")
                print("No GPU detected. Using CPU.")
            return

        if self.config.device == enums.Device.GPU:
            if torch.cuda.is_available():
                self.device = torch.device("cuda")
                print(f"GPU detected: {torch.cuda.get_device_name(0)}")
                print("Using GPU.")
                return

            print("Warning: GPU requested but not available. Falling back to CPU.")

        self.device = torch.device("cpu")
        print("Using CPU.")

    def _require_model(self) -> TorchResNet:
        """
        Return the model, building it first if `init_model()` has not been called yet.
        """

        if self.model is None:
            self.init_model()

        return self.model

    def init_model(self) -> TorchResNet:
        """
        Initialize the ResNet model based on the specified configuration.
        """

        if self.config.weight_initialization != enums.WeightInitialization.HE:
            raise ConfigurationError(f"Unsupported weight initialization: {self.config.weight_initialization!r}")

        # Build into locals, the engine only keeps a model that is fully initialized and on its device.
        model_config = ModelConfig.from_variant(self.config.variant, self.config.num_classes)
        model = TorchResNet(model_config, self.config.activation)
        model.initialize_weights(zero_init_residual=self.config.zero_init_residual)

        self.model = model.to(self.device)
        self.model_config = model_config
        print(
            f"ResNet-{self.model_config.depth} initialized with {self.config.num_classes} classes "
            f"and moved to {self.device}."
        )

        return self.model

    def summary(self) -> torchinfo.ModelStatistics:
        """
        Layer-by-layer summary of the model for an input of shape `(batch_size, 3, image_size, image_size)`.
        """

        model = self._require_model()
        input_size = (self.config.batch_size, 3, self.config.image_size, self.config.image_size)

        # torchinfo runs a forward pass in training mode, which would update the batch norm. running statistics.
        training = model.training
        model.eval()
        try:
            return torchinfo.summary(model, input_size=input_size, device=self.device, verbose=0)
        finally:
            model.train(training)

    def freeze(self) -> TorchResNet:
        """
        Freeze the model: evaluation mode (batch norm. uses its running statistics) and no gradients.
        Two forward passes on identical inputs then give bit-identical outputs.
        """

        model = self._require_model()
        model.eval()
        for parameter in model.parameters():
            parameter.requires_grad_(False)

        return model

    def predict(self, inputs: torch.Tensor) -> torch.Tensor:
        """
        Compute the logits of a batch of images with shape `(batch_size, 3, height, width)`.
        """

        model = self._require_model()
        training = model.training
        model.eval()
        try:
            with torch.no_grad():
                return model(inputs.to(self.device))
        finally:
            model.train(training)

    def evaluate(self, dataloader, criterion=None):
        """
        Evaluate model on given dataloader. Returns accuracy and optionally loss.

        Args:
            dataloader: Any iterable of `(inputs, targets)` batches, e.g. a `torch.utils.data.DataLoader`.
            criterion: Optional loss function, e.g. `nn.CrossEntropyLoss()`.
        """

        model = self._require_model()
        training = model.training
        model.eval()
        correct = 0
        total = 0
        total_loss = 0.0
        num_batches = 0

        try:
            with torch.no_grad():
                for inputs, targets in dataloader:
                    inputs, targets = inputs.to(self.device), targets.to(self.device)
                    outputs: torch.Tensor = model(inputs)
                    _, predicted = outputs.max(1)
                    total += targets.size(0)
                    correct += predicted.eq(targets).sum().item()
                    num_batches += 1

                    if criterion is not None:
                        total_loss += criterion(outputs, targets).item()
        finally:
            model.train(training)  # Switch back to the previous mode.

        if total == 0:
            raise ValueError("Cannot evaluate on an empty dataloader.")

        accuracy = correct / total
        if criterion is not None:
            return accuracy, total_loss / num_batches

        return accuracy

    @staticmethod
    def count_parameters(model: nn.Module, trainable_only: bool = False) -> int:
        """
        Number of (optionally only trainable) parameters of `model`.
        """

        return sum(p.numel() for p in model.parameters() if p.requires_grad or not trainable_only)
